"""
Decoder for US METAR/SPECI surface weather observations.

Provides:
- decode / MetarParser: Decode a raw report line into a Report
- Report, Wind, Visibility, ReportTime: Immutable decoded records
- WeatherPhenomenon: Decoded present weather group
- DecodeError and subclasses: Precise decoding failures
- DecoderConfig: Strict or lenient weather decoding
- ReportCollection: Queryable batch of reports with DataFrame export

Example:
    from metar_decoder import decode

    report = decode("METAR KJFK 250251Z 21010G18KT 180V240 1 1/2SM -RA BR")
    report.wind.gust_knots          # 18
    report.visibility.distance_sm   # Fraction(3, 2)
    report.weather[0].precipitation  # Precipitation.RAIN
"""

from metar_decoder.config import DecoderConfig
from metar_decoder.exceptions import (
    DecodeError,
    MalformedTimeError,
    MissingWindGroupError,
    TruncatedReportError,
    InvalidVisibilityError,
    UnrecognizedWeatherError,
)
from metar_decoder.models import (
    Report,
    ReportKind,
    ReportTime,
    RespectModifier,
    Wind,
    WindDirection,
    WindDirectionKind,
    Visibility,
)
from metar_decoder.weather import (
    WeatherPhenomenon,
    WeatherIntensity,
    WeatherDescriptor,
    Precipitation,
    Obscuration,
    OtherPhenomenon,
    decode_weather,
)
from metar_decoder.parser import MetarParser, decode
from metar_decoder.collection import ReportCollection

__version__ = '0.1.0'
__all__ = [
    'decode',
    'decode_weather',
    'MetarParser',
    'DecoderConfig',
    'Report',
    'ReportKind',
    'ReportTime',
    'RespectModifier',
    'Wind',
    'WindDirection',
    'WindDirectionKind',
    'Visibility',
    'WeatherPhenomenon',
    'WeatherIntensity',
    'WeatherDescriptor',
    'Precipitation',
    'Obscuration',
    'OtherPhenomenon',
    'ReportCollection',
    'DecodeError',
    'MalformedTimeError',
    'MissingWindGroupError',
    'TruncatedReportError',
    'InvalidVisibilityError',
    'UnrecognizedWeatherError',
]
