"""
Decoder configuration.
"""

import os
from dataclasses import dataclass

STRICT_WEATHER_ENV = "METAR_DECODER_STRICT_WEATHER"

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class DecoderConfig:
    """
    Options controlling how lenient the decoder is.

    Attributes:
        strict_weather: Reject present weather groups with unknown codes
            instead of decoding them to an empty phenomenon
    """

    strict_weather: bool = False

    @classmethod
    def from_env(cls) -> 'DecoderConfig':
        """Build a config from METAR_DECODER_* environment variables."""
        strict = os.getenv(STRICT_WEATHER_ENV, "").strip().lower() in _TRUTHY
        return cls(strict_weather=strict)
