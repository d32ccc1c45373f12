"""
Exceptions raised while decoding METAR reports.

Every error aborts the decode of the current report. The offending token
(or accumulated span for multi-token groups) is kept on the exception so
the caller can point at the bad input.
"""

from typing import Optional


class DecodeError(ValueError):
    """Base class for all report decoding failures."""

    def __init__(self, message: str, token: Optional[str] = None, field: Optional[str] = None):
        """
        Initialize decode error.

        Args:
            message: Error message
            token: Offending token or span, None if the input ran out
            field: Name of the report field being decoded
        """
        super().__init__(message)
        self.token = token
        self.field = field

    def __str__(self) -> str:
        message = super().__str__()
        if self.token is not None:
            return f"{message} (got: {self.token!r})"
        return message


class MalformedTimeError(DecodeError):
    """Observation time group is not DDHHMMZ."""

    def __init__(self, token: Optional[str]):
        super().__init__("Expected observation time group DDHHMMZ", token, field='time')


class MissingWindGroupError(DecodeError):
    """Wind group is absent or does not match the wind pattern."""

    def __init__(self, token: Optional[str]):
        super().__init__("Expected wind group", token, field='wind')


class TruncatedReportError(DecodeError):
    """Token sequence ran out while a group was still expected."""

    def __init__(self, field: str, token: Optional[str] = None):
        super().__init__(f"Report ended while decoding {field}", token, field=field)


class InvalidVisibilityError(DecodeError):
    """Visibility span matches none of the integer, fraction or mixed shapes."""

    def __init__(self, token: str):
        super().__init__("Unrecognised visibility", token, field='visibility')


class UnrecognizedWeatherError(DecodeError):
    """Weather group contains unknown codes (strict mode only)."""

    def __init__(self, token: str):
        super().__init__("Unrecognised present weather group", token, field='weather')
