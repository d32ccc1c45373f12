"""
Decoder for US METAR/SPECI surface observation reports.

Groups are decoded left to right in the order they appear in a report
(FMH-1 chapter 12). Optional groups are detected by looking at the next
token before consuming it, so an absent group leaves the cursor untouched.
"""

import re
import logging
from fractions import Fraction
from typing import Optional, Iterable, Tuple, TYPE_CHECKING

from metar_decoder.config import DecoderConfig
from metar_decoder.exceptions import (
    DecodeError,
    MalformedTimeError,
    MissingWindGroupError,
    TruncatedReportError,
    InvalidVisibilityError,
)
from metar_decoder.models import (
    Report,
    ReportKind,
    ReportTime,
    RespectModifier,
    Wind,
    WindDirection,
    Visibility,
)
from metar_decoder.tokenizer import TokenCursor, tokenize
from metar_decoder.weather import decode_weather

if TYPE_CHECKING:
    from metar_decoder.collection import ReportCollection

logger = logging.getLogger(__name__)


class MetarParser:
    """
    Decode METAR text into Report objects.

    Example:
        report = MetarParser.parse("METAR KJFK 250251Z 08006KT 10SM")
        report.wind.speed_knots  # 6
    """

    REPORT_KINDS = {
        'METAR': ReportKind.ROUTINE,
        'SPECI': ReportKind.SPECIAL,
    }

    RESPECT_MODIFIERS = {
        'AUTO': RespectModifier.AUTOMATIC,
        'COR': RespectModifier.CORRECTION,
    }

    CALM_WIND = '00000KT'

    TIME_PATTERN = re.compile(r'(\d\d)(\d\d)(\d\d)Z')

    WIND_PATTERN = re.compile(
        r'(?P<direction>\d{3}|VRB)'
        r'(?P<speed>\d{2,3})'
        r'(?:G(?P<gust>\d{2,3}))?'
        r'KT'
    )

    VARIANCE_PATTERN = re.compile(r'(\d{3})V(\d{3})')

    VISIBILITY_UNIT = 'SM'

    # Tried in order, first match wins
    VISIBILITY_INTEGER = re.compile(r'(\d+)')
    VISIBILITY_FRACTION = re.compile(r'(\d+)/(\d+)')
    VISIBILITY_MIXED = re.compile(r'(\d+) (\d+)/(\d+)')

    @classmethod
    def parse(cls, text: str, config: Optional[DecoderConfig] = None) -> Report:
        """
        Decode one report line.

        Args:
            text: Report line, optionally starting with METAR or SPECI
            config: Decoder options, defaults to DecoderConfig()

        Returns:
            Decoded Report

        Raises:
            DecodeError: If a mandatory group is missing or malformed
        """
        config = config or DecoderConfig()
        cursor = TokenCursor(tokenize(text))

        kind = cls._parse_kind(cursor)
        station = cls._parse_station(cursor)
        time = cls._parse_time(cursor)
        respect_modifier = cls._parse_respect_modifier(cursor)
        wind = cls._parse_wind(cursor)
        visibility = cls._parse_visibility(cursor)
        weather = tuple(
            decode_weather(token, strict=config.strict_weather)
            for token in cursor.rest()
        )

        return Report(
            kind=kind,
            station=station,
            time=time,
            respect_modifier=respect_modifier,
            wind=wind,
            visibility=visibility,
            weather=weather,
            raw_text=text.strip(),
        )

    @classmethod
    def parse_many(
        cls,
        lines: Iterable[str],
        config: Optional[DecoderConfig] = None,
        skip_errors: bool = True,
    ) -> 'ReportCollection':
        """
        Decode a batch of report lines.

        Blank lines are ignored.

        Args:
            lines: Report lines
            config: Decoder options
            skip_errors: Log and skip reports that fail to decode instead of raising

        Returns:
            ReportCollection of decoded reports, in input order
        """
        from metar_decoder.collection import ReportCollection

        reports = []
        for line in lines:
            if not line.strip():
                continue
            try:
                reports.append(cls.parse(line, config))
            except DecodeError as e:
                if not skip_errors:
                    raise
                logger.warning("Skipping report %r: %s", line.strip()[:80], e)

        return ReportCollection(reports)

    # --- Group decoders ---

    @classmethod
    def _parse_kind(cls, cursor: TokenCursor) -> ReportKind:
        kind = cls.REPORT_KINDS.get(cursor.peek())
        if kind is None:
            return ReportKind.UNSPECIFIED
        cursor.advance()
        return kind

    @classmethod
    def _parse_station(cls, cursor: TokenCursor) -> str:
        station = cursor.peek()
        if station is None:
            raise TruncatedReportError('station')
        cursor.advance()
        return station

    @classmethod
    def _parse_time(cls, cursor: TokenCursor) -> ReportTime:
        token = cursor.peek()
        if token is None:
            raise MalformedTimeError(None)

        match = cls.TIME_PATTERN.fullmatch(token)
        if not match:
            raise MalformedTimeError(token)

        cursor.advance()
        day, hour, minute = (int(g) for g in match.groups())
        return ReportTime(day=day, hour=hour, minute=minute)

    @classmethod
    def _parse_respect_modifier(cls, cursor: TokenCursor) -> RespectModifier:
        modifier = cls.RESPECT_MODIFIERS.get(cursor.peek())
        if modifier is None:
            return RespectModifier.UNSPECIFIED
        cursor.advance()
        return modifier

    @classmethod
    def _parse_wind(cls, cursor: TokenCursor) -> Wind:
        token = cursor.peek()
        if token is None:
            raise MissingWindGroupError(None)

        if token == cls.CALM_WIND:
            cursor.advance()
            return Wind.calm()

        match = cls.WIND_PATTERN.fullmatch(token)
        if not match:
            raise MissingWindGroupError(token)

        if match.group('direction') == 'VRB':
            direction = WindDirection.variable()
        else:
            degrees = int(match.group('direction'))
            if degrees > 360:
                raise MissingWindGroupError(token)
            direction = WindDirection.heading(degrees)

        speed = int(match.group('speed'))
        gust = int(match.group('gust')) if match.group('gust') else None
        cursor.advance()

        variance = None
        if not direction.is_variable:
            variance = cls._parse_variance(cursor)

        return Wind(direction=direction, speed_knots=speed, gust_knots=gust, variance=variance)

    @classmethod
    def _parse_variance(cls, cursor: TokenCursor) -> Optional[Tuple[int, int]]:
        token = cursor.peek()
        if token is None:
            return None

        match = cls.VARIANCE_PATTERN.fullmatch(token)
        if not match:
            return None

        low, high = int(match.group(1)), int(match.group(2))
        if low > 360 or high > 360:
            logger.debug("Ignoring out of range variance group %r", token)
            return None

        cursor.advance()
        return low, high

    @classmethod
    def _parse_visibility(cls, cursor: TokenCursor) -> Visibility:
        parts = []
        while not parts or not parts[-1].endswith(cls.VISIBILITY_UNIT):
            token = cursor.peek()
            if token is None:
                raise TruncatedReportError('visibility', " ".join(parts) or None)
            parts.append(token)
            cursor.advance()

        span = " ".join(parts)
        value = span[:-len(cls.VISIBILITY_UNIT)]

        is_less_than = value.startswith('M')
        if is_less_than:
            value = value[1:]

        distance = cls._parse_statute_miles(value)
        if distance is None:
            raise InvalidVisibilityError(span)

        return Visibility(distance_sm=distance, is_less_than=is_less_than)

    @classmethod
    def _parse_statute_miles(cls, text: str) -> Optional[Fraction]:
        """Parse '10', '1/4' or '1 5/16' into an exact Fraction."""
        match = cls.VISIBILITY_INTEGER.fullmatch(text)
        if match:
            return Fraction(int(match.group(1)))

        match = cls.VISIBILITY_FRACTION.fullmatch(text)
        if match:
            return cls._fraction(match.group(1), match.group(2))

        match = cls.VISIBILITY_MIXED.fullmatch(text)
        if match:
            fraction = cls._fraction(match.group(2), match.group(3))
            if fraction is None:
                return None
            return int(match.group(1)) + fraction

        return None

    @staticmethod
    def _fraction(numerator: str, denominator: str) -> Optional[Fraction]:
        if int(denominator) == 0:
            return None
        return Fraction(int(numerator), int(denominator))


def decode(text: str, config: Optional[DecoderConfig] = None) -> Report:
    """Decode one METAR/SPECI report line into a Report."""
    return MetarParser.parse(text, config)
