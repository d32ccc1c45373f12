"""Splitting report text into tokens and walking them with a cursor."""

from typing import List, Optional, Sequence


def tokenize(text: str) -> List[str]:
    """Split a report line on runs of whitespace, dropping empty tokens."""
    return text.split()


class TokenCursor:
    """
    Forward-only read position over an immutable token sequence.

    Example:
        cursor = TokenCursor(tokenize("METAR KJFK 250251Z"))
        if cursor.peek() == "METAR":
            cursor.advance()
    """

    def __init__(self, tokens: Sequence[str]):
        self._tokens = tuple(tokens)
        self._position = 0

    @property
    def position(self) -> int:
        return self._position

    @property
    def remaining(self) -> int:
        return len(self._tokens) - self._position

    @property
    def exhausted(self) -> bool:
        return self._position >= len(self._tokens)

    def peek(self, offset: int = 0) -> Optional[str]:
        """Return the token at the cursor (plus offset) without consuming it."""
        index = self._position + offset
        if index < len(self._tokens):
            return self._tokens[index]
        return None

    def advance(self, count: int = 1) -> None:
        """Move the cursor forward, never past the end."""
        self._position = min(self._position + count, len(self._tokens))

    def rest(self) -> List[str]:
        """Consume and return every remaining token."""
        tokens = list(self._tokens[self._position:])
        self._position = len(self._tokens)
        return tokens

    def __repr__(self) -> str:
        return f"TokenCursor(position={self._position}, remaining={self.remaining})"
