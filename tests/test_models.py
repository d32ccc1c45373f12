"""Tests for decoded report models: invariants, serialization, time resolution."""

import pytest
from datetime import datetime, timezone
from fractions import Fraction

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
from metar_decoder.parser import decode


class TestWindInvariants:
    """Illegal wind combinations cannot be built."""

    def test_calm_factory(self):
        wind = Wind.calm()
        assert wind.is_calm
        assert wind.speed_knots == 0

    def test_calm_with_speed_rejected(self):
        with pytest.raises(ValueError):
            Wind(WindDirection.calm(), speed_knots=5)

    def test_calm_with_gust_rejected(self):
        with pytest.raises(ValueError):
            Wind(WindDirection.calm(), gust_knots=15)

    def test_variable_with_variance_rejected(self):
        with pytest.raises(ValueError):
            Wind(WindDirection.variable(), speed_knots=4, variance=(180, 240))

    def test_variance_out_of_range_rejected(self):
        with pytest.raises(ValueError):
            Wind(WindDirection.heading(210), speed_knots=10, variance=(180, 400))

    def test_heading_requires_degrees(self):
        with pytest.raises(ValueError):
            WindDirection(WindDirectionKind.HEADING)

    def test_heading_out_of_range(self):
        with pytest.raises(ValueError):
            WindDirection.heading(361)

    def test_calm_has_no_degrees(self):
        with pytest.raises(ValueError):
            WindDirection(WindDirectionKind.CALM, 0)

    def test_str(self):
        assert str(WindDirection.heading(80)) == "080"
        assert str(WindDirection.variable()) == "variable"


class TestReportTime:
    """Test placing day/hour/minute on a calendar."""

    def test_same_month(self):
        time = ReportTime(25, 2, 51)
        assert time.resolve(datetime(2024, 3, 25, 3, 0)) == datetime(2024, 3, 25, 2, 51)

    def test_previous_month(self):
        time = ReportTime(31, 23, 55)
        assert time.resolve(datetime(2024, 4, 1, 0, 5)) == datetime(2024, 3, 31, 23, 55)

    def test_previous_year(self):
        time = ReportTime(31, 23, 55)
        assert time.resolve(datetime(2024, 1, 1, 0, 5)) == datetime(2023, 12, 31, 23, 55)

    def test_skips_short_months(self):
        # No 30th in February, so the most recent match is January
        time = ReportTime(30, 12, 0)
        assert time.resolve(datetime(2024, 2, 15)) == datetime(2024, 1, 30, 12, 0)

    def test_keeps_timezone(self):
        reference = datetime(2024, 3, 25, 3, 0, tzinfo=timezone.utc)
        resolved = ReportTime(25, 2, 51).resolve(reference)
        assert resolved.tzinfo == timezone.utc

    def test_impossible_time(self):
        with pytest.raises(ValueError):
            ReportTime(99, 99, 99).resolve(datetime(2024, 3, 25))

    def test_str(self):
        assert str(ReportTime(5, 2, 1)) == "050201Z"


class TestSerialization:
    """Test to_dict/from_dict."""

    def test_report_round_trip(self):
        report = decode("SPECI KJFK 250320Z COR 21018G29KT 180V240 M1/4SM +TSRA BR")
        restored = Report.from_dict(report.to_dict())
        assert restored == report

    def test_report_to_dict(self):
        data = decode("KJFK 250251Z AUTO VRB04KT 1 5/16SM").to_dict()
        assert data['kind'] == "unspecified"
        assert data['respect_modifier'] == "automatic"
        assert data['time'] == {'day': 25, 'hour': 2, 'minute': 51}
        assert data['wind']['direction'] == {'kind': 'variable', 'degrees': None}
        assert data['wind']['gust_knots'] is None
        assert data['visibility'] == {'distance_sm': "21/16", 'is_less_than': False}
        assert data['weather'] == []

    def test_calm_wind_round_trip(self):
        wind = Wind.calm()
        assert Wind.from_dict(wind.to_dict()) == wind

    def test_from_dict_defaults(self):
        report = Report.from_dict({
            'station': 'KBOS',
            'time': {'day': 1, 'hour': 0, 'minute': 0},
            'wind': {'direction': {'kind': 'calm'}},
        })
        assert report.kind == ReportKind.UNSPECIFIED
        assert report.respect_modifier == RespectModifier.UNSPECIFIED
        assert report.visibility is None
        assert report.weather == ()

    def test_visibility_str(self):
        assert str(Visibility(Fraction(1, 4), is_less_than=True)) == "less than 1/4 SM"

    def test_repr(self):
        report = decode("METAR KJFK 250251Z 08006KT 10SM")
        assert repr(report) == "Report(routine KJFK 250251Z)"

    def test_reports_are_hashable(self):
        report = decode("METAR KJFK 250251Z 08006KT 10SM -RA")
        assert {report, decode("METAR KJFK 250251Z 08006KT 10SM -RA")} == {report}
