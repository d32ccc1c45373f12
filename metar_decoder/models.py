"""Decoded METAR report data models."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from fractions import Fraction
from typing import Optional, Tuple, Dict, Any

from dateutil.relativedelta import relativedelta

from metar_decoder.weather import WeatherPhenomenon

# How many months back ReportTime.resolve will look for a valid day
_MAX_MONTHS_BACK = 12


class ReportKind(Enum):
    """
    Type of report.

    METAR is a routine scheduled observation, SPECI a special observation
    triggered by a significant change. UNSPECIFIED when the report carries
    no type label.
    """

    ROUTINE = "routine"
    SPECIAL = "special"
    UNSPECIFIED = "unspecified"


class RespectModifier(Enum):
    """AUTO for fully automated reports, COR for corrected ones."""

    AUTOMATIC = "automatic"
    CORRECTION = "correction"
    UNSPECIFIED = "unspecified"


@dataclass(frozen=True)
class ReportTime:
    """
    Observation time as reported: day of month, hour and minute in UTC.

    The report carries no month or year, and no range checks are applied
    when decoding. Use resolve() to place it on a calendar.
    """

    day: int
    hour: int
    minute: int

    def resolve(self, reference: datetime) -> datetime:
        """
        Place the observation in the latest month where it is not after reference.

        Args:
            reference: Date context, typically the time the report was received

        Returns:
            datetime with reference's tzinfo

        Raises:
            ValueError: If no month within the last year has a matching timestamp
        """
        base = reference.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
        for months_back in range(_MAX_MONTHS_BACK + 1):
            month_start = base - relativedelta(months=months_back)
            try:
                candidate = month_start.replace(day=self.day, hour=self.hour, minute=self.minute)
            except ValueError:
                continue
            if candidate <= reference:
                return candidate
        raise ValueError(f"Cannot resolve {self} against {reference.isoformat()}")

    def to_dict(self) -> Dict[str, int]:
        return {'day': self.day, 'hour': self.hour, 'minute': self.minute}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ReportTime':
        return cls(day=data['day'], hour=data['hour'], minute=data['minute'])

    def __str__(self) -> str:
        return f"{self.day:02d}{self.hour:02d}{self.minute:02d}Z"


class WindDirectionKind(Enum):
    CALM = "calm"
    VARIABLE = "variable"
    HEADING = "heading"


@dataclass(frozen=True)
class WindDirection:
    """
    Where the wind blows from: calm, variable, or a heading in degrees.

    Only HEADING carries degrees, 0 to 360. Reports give north as 360, not
    000, so 360 is kept as reported. Build with calm(), variable() or heading().
    """

    kind: WindDirectionKind
    degrees: Optional[int] = None

    def __post_init__(self):
        if self.kind == WindDirectionKind.HEADING:
            if self.degrees is None or not 0 <= self.degrees <= 360:
                raise ValueError(f"Wind heading must be within 0-360, got {self.degrees}")
        elif self.degrees is not None:
            raise ValueError(f"{self.kind.value} wind has no heading")

    @classmethod
    def calm(cls) -> 'WindDirection':
        return cls(WindDirectionKind.CALM)

    @classmethod
    def variable(cls) -> 'WindDirection':
        return cls(WindDirectionKind.VARIABLE)

    @classmethod
    def heading(cls, degrees: int) -> 'WindDirection':
        return cls(WindDirectionKind.HEADING, degrees)

    @property
    def is_calm(self) -> bool:
        return self.kind == WindDirectionKind.CALM

    @property
    def is_variable(self) -> bool:
        return self.kind == WindDirectionKind.VARIABLE

    def to_dict(self) -> Dict[str, Any]:
        return {'kind': self.kind.value, 'degrees': self.degrees}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'WindDirection':
        return cls(WindDirectionKind(data['kind']), data.get('degrees'))

    def __str__(self) -> str:
        if self.kind == WindDirectionKind.HEADING:
            return f"{self.degrees:03d}"
        return self.kind.value


@dataclass(frozen=True)
class Wind:
    """
    Surface wind.

    Attributes:
        direction: Calm, variable or heading
        speed_knots: Mean speed, 0 when calm
        gust_knots: Gust speed, None when no gust group was reported
        variance: (low, high) headings when direction varies, None otherwise
    """

    direction: WindDirection
    speed_knots: int = 0
    gust_knots: Optional[int] = None
    variance: Optional[Tuple[int, int]] = None

    def __post_init__(self):
        if self.direction.is_calm:
            if self.speed_knots != 0 or self.gust_knots is not None or self.variance is not None:
                raise ValueError("Calm wind cannot have speed, gust or variance")
        if self.direction.is_variable and self.variance is not None:
            raise ValueError("Variable wind cannot also report a directional variance")
        if self.variance is not None:
            low, high = self.variance
            if not (0 <= low <= 360 and 0 <= high <= 360):
                raise ValueError(f"Directional variance out of range: {low}V{high}")

    @classmethod
    def calm(cls) -> 'Wind':
        return cls(WindDirection.calm())

    @property
    def is_calm(self) -> bool:
        return self.direction.is_calm

    @property
    def is_gusting(self) -> bool:
        return self.gust_knots is not None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'direction': self.direction.to_dict(),
            'speed_knots': self.speed_knots,
            'gust_knots': self.gust_knots,
            'variance': list(self.variance) if self.variance else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Wind':
        variance = data.get('variance')
        return cls(
            direction=WindDirection.from_dict(data['direction']),
            speed_knots=data.get('speed_knots', 0),
            gust_knots=data.get('gust_knots'),
            variance=tuple(variance) if variance else None,
        )


@dataclass(frozen=True)
class Visibility:
    """
    Prevailing visibility in statute miles.

    Whole, fractional and mixed-number encodings all normalise to the same
    Fraction, so "1 1/2SM" and "3/2SM" compare equal. is_less_than is set
    when the value is the reportable minimum ("M1/4SM").
    """

    distance_sm: Fraction
    is_less_than: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            'distance_sm': str(self.distance_sm),
            'is_less_than': self.is_less_than,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Visibility':
        return cls(
            distance_sm=Fraction(data['distance_sm']),
            is_less_than=data.get('is_less_than', False),
        )

    def __str__(self) -> str:
        prefix = "less than " if self.is_less_than else ""
        return f"{prefix}{self.distance_sm} SM"


@dataclass(frozen=True)
class Report:
    """
    Decoded METAR or SPECI surface observation.

    Attributes:
        kind: Routine, special or unspecified
        station: Reporting station identifier, passed through as given
        time: Observation day/hour/minute in UTC
        respect_modifier: AUTO, COR or unspecified
        wind: Surface wind
        visibility: Prevailing visibility
        weather: Present weather groups in report order
        raw_text: Original report line
    """

    kind: ReportKind
    station: str
    time: ReportTime
    respect_modifier: RespectModifier
    wind: Wind
    visibility: Optional[Visibility] = None
    weather: Tuple[WeatherPhenomenon, ...] = field(default_factory=tuple)
    raw_text: str = ""

    @classmethod
    def decode(cls, raw_text: str) -> 'Report':
        """Decode a report line. See MetarParser.parse."""
        from metar_decoder.parser import MetarParser
        return MetarParser.parse(raw_text)

    @property
    def is_automated(self) -> bool:
        return self.respect_modifier == RespectModifier.AUTOMATIC

    @property
    def is_corrected(self) -> bool:
        return self.respect_modifier == RespectModifier.CORRECTION

    def to_dict(self) -> dict:
        """Serialize to dictionary for JSON export."""
        return {
            'kind': self.kind.value,
            'station': self.station,
            'time': self.time.to_dict(),
            'respect_modifier': self.respect_modifier.value,
            'wind': self.wind.to_dict(),
            'visibility': self.visibility.to_dict() if self.visibility else None,
            'weather': [w.to_dict() for w in self.weather],
            'raw_text': self.raw_text,
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'Report':
        """Create Report from dictionary."""
        visibility = None
        if data.get('visibility'):
            visibility = Visibility.from_dict(data['visibility'])

        return cls(
            kind=ReportKind(data.get('kind', ReportKind.UNSPECIFIED.value)),
            station=data.get('station', ''),
            time=ReportTime.from_dict(data['time']),
            respect_modifier=RespectModifier(
                data.get('respect_modifier', RespectModifier.UNSPECIFIED.value)
            ),
            wind=Wind.from_dict(data['wind']),
            visibility=visibility,
            weather=tuple(WeatherPhenomenon.from_dict(w) for w in data.get('weather', [])),
            raw_text=data.get('raw_text', ''),
        )

    def __repr__(self) -> str:
        return f"Report({self.kind.value} {self.station} {self.time})"
