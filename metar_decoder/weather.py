"""
Present weather groups.

A present weather group packs up to five optional codes into one token, in
this fixed order and without separators:

    intensity/proximity  descriptor  precipitation  obscuration  other
    (-, +, VC)           (MI..FZ)    (DZ..UP)       (BR..PY)     (PO..DS)

For example "+TSRA" is heavy thunderstorm with rain and "VCFG" is fog in
the vicinity. No intensity prefix means moderate.
"""

import re
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Dict, Any

from metar_decoder.exceptions import UnrecognizedWeatherError

logger = logging.getLogger(__name__)


class WeatherIntensity(Enum):
    LIGHT = "light"
    MODERATE = "moderate"
    HEAVY = "heavy"
    VICINITY = "vicinity"


class WeatherDescriptor(Enum):
    SHALLOW = "shallow"
    PARTIAL = "partial"
    PATCHES = "patches"
    LOW_DRIFTING = "low drifting"
    BLOWING = "blowing"
    SHOWERS = "showers"
    THUNDERSTORM = "thunderstorm"
    FREEZING = "freezing"


class Precipitation(Enum):
    DRIZZLE = "drizzle"
    RAIN = "rain"
    SNOW = "snow"
    SNOW_GRAINS = "snow grains"
    ICE_CRYSTALS = "ice crystals"
    ICE_PELLETS = "ice pellets"
    HAIL = "hail"
    SNOW_PELLETS = "snow pellets"
    UNKNOWN = "unknown"


class Obscuration(Enum):
    MIST = "mist"
    FOG = "fog"
    SMOKE = "smoke"
    VOLCANIC_ASH = "volcanic ash"
    DUST = "widespread dust"
    SAND = "sand"
    HAZE = "haze"
    SPRAY = "spray"


class OtherPhenomenon(Enum):
    WHIRLS = "whirls"
    SQUALLS = "squalls"
    FUNNEL_CLOUD = "funnel cloud"
    SANDSTORM = "sandstorm"
    DUSTSTORM = "duststorm"


INTENSITIES: Dict[str, WeatherIntensity] = {
    "": WeatherIntensity.MODERATE,
    "-": WeatherIntensity.LIGHT,
    "+": WeatherIntensity.HEAVY,
    "VC": WeatherIntensity.VICINITY,
}

DESCRIPTORS: Dict[str, WeatherDescriptor] = {
    "MI": WeatherDescriptor.SHALLOW,
    "PR": WeatherDescriptor.PARTIAL,
    "BC": WeatherDescriptor.PATCHES,
    "DR": WeatherDescriptor.LOW_DRIFTING,
    "BL": WeatherDescriptor.BLOWING,
    "SH": WeatherDescriptor.SHOWERS,
    "TS": WeatherDescriptor.THUNDERSTORM,
    "FZ": WeatherDescriptor.FREEZING,
}

PRECIPITATIONS: Dict[str, Precipitation] = {
    "DZ": Precipitation.DRIZZLE,
    "RA": Precipitation.RAIN,
    "SN": Precipitation.SNOW,
    "SG": Precipitation.SNOW_GRAINS,
    "IC": Precipitation.ICE_CRYSTALS,
    "PL": Precipitation.ICE_PELLETS,
    "GR": Precipitation.HAIL,
    "GS": Precipitation.SNOW_PELLETS,
    "UP": Precipitation.UNKNOWN,
}

OBSCURATIONS: Dict[str, Obscuration] = {
    "BR": Obscuration.MIST,
    "FG": Obscuration.FOG,
    "FU": Obscuration.SMOKE,
    "VA": Obscuration.VOLCANIC_ASH,
    "DU": Obscuration.DUST,
    "SA": Obscuration.SAND,
    "HZ": Obscuration.HAZE,
    "PY": Obscuration.SPRAY,
}

OTHER_PHENOMENA: Dict[str, OtherPhenomenon] = {
    "PO": OtherPhenomenon.WHIRLS,
    "SQ": OtherPhenomenon.SQUALLS,
    "FC": OtherPhenomenon.FUNNEL_CLOUD,
    "SS": OtherPhenomenon.SANDSTORM,
    "DS": OtherPhenomenon.DUSTSTORM,
}


def _alternation(codes) -> str:
    return "|".join(re.escape(code) for code in codes if code)


WEATHER_PATTERN = re.compile(
    f"(?P<intensity>{_alternation(INTENSITIES)})?"
    f"(?P<descriptor>{_alternation(DESCRIPTORS)})?"
    f"(?P<precipitation>{_alternation(PRECIPITATIONS)})?"
    f"(?P<obscuration>{_alternation(OBSCURATIONS)})?"
    f"(?P<other>{_alternation(OTHER_PHENOMENA)})?"
)


def _enum_or_none(enum_cls, value):
    return enum_cls(value) if value else None


@dataclass(frozen=True)
class WeatherPhenomenon:
    """
    One decoded present weather group.

    Attributes:
        code: The token as it appeared in the report
        intensity: Intensity or proximity, MODERATE when unmarked
        descriptor: Qualifier such as showers or freezing
        precipitation: Precipitation type
        obscuration: Obscuring phenomenon
        other: Other phenomenon such as squalls
    """

    code: str
    intensity: WeatherIntensity = WeatherIntensity.MODERATE
    descriptor: Optional[WeatherDescriptor] = None
    precipitation: Optional[Precipitation] = None
    obscuration: Optional[Obscuration] = None
    other: Optional[OtherPhenomenon] = None

    @property
    def is_empty(self) -> bool:
        """True when none of the descriptive codes were recognised."""
        return (
            self.descriptor is None
            and self.precipitation is None
            and self.obscuration is None
            and self.other is None
        )

    def describe(self) -> str:
        """Plain English rendering, e.g. 'heavy thunderstorm rain'."""
        parts = []
        if self.intensity != WeatherIntensity.MODERATE:
            parts.append(self.intensity.value)
        for item in (self.descriptor, self.precipitation, self.obscuration, self.other):
            if item is not None:
                parts.append(item.value)
        return " ".join(parts)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'code': self.code,
            'intensity': self.intensity.value,
            'descriptor': self.descriptor.value if self.descriptor else None,
            'precipitation': self.precipitation.value if self.precipitation else None,
            'obscuration': self.obscuration.value if self.obscuration else None,
            'other': self.other.value if self.other else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'WeatherPhenomenon':
        return cls(
            code=data.get('code', ''),
            intensity=WeatherIntensity(data.get('intensity') or WeatherIntensity.MODERATE.value),
            descriptor=_enum_or_none(WeatherDescriptor, data.get('descriptor')),
            precipitation=_enum_or_none(Precipitation, data.get('precipitation')),
            obscuration=_enum_or_none(Obscuration, data.get('obscuration')),
            other=_enum_or_none(OtherPhenomenon, data.get('other')),
        )

    def __repr__(self) -> str:
        return f"WeatherPhenomenon({self.code!r})"


def decode_weather(token: str, strict: bool = False) -> WeatherPhenomenon:
    """
    Decode a single present weather token.

    Codes are matched from the start of the token. In lenient mode a token
    with no recognised code decodes to an empty phenomenon with moderate
    intensity; trailing characters after the last recognised code are
    ignored.

    Args:
        token: Weather group such as "-SHRA" or "VCTS"
        strict: Require the whole token to be recognised and to carry at
            least one descriptive code

    Returns:
        WeatherPhenomenon

    Raises:
        UnrecognizedWeatherError: In strict mode, for unknown codes
    """
    match = WEATHER_PATTERN.match(token)
    phenomenon = WeatherPhenomenon(
        code=token,
        intensity=INTENSITIES[match.group('intensity') or ""],
        descriptor=DESCRIPTORS.get(match.group('descriptor')),
        precipitation=PRECIPITATIONS.get(match.group('precipitation')),
        obscuration=OBSCURATIONS.get(match.group('obscuration')),
        other=OTHER_PHENOMENA.get(match.group('other')),
    )

    fully_matched = match.end() == len(token)
    if strict and (phenomenon.is_empty or not fully_matched):
        raise UnrecognizedWeatherError(token)

    if phenomenon.is_empty:
        logger.debug("No weather codes recognised in %r", token)
    elif not fully_matched:
        logger.debug("Ignoring trailing %r in weather group %r", token[match.end():], token)

    return phenomenon
