"""Queryable collection of decoded reports."""

from datetime import datetime
from fractions import Fraction
from typing import List, Optional, Union

import pandas as pd

from metar_decoder.models import Report, ReportKind
from metar_decoder.queryable_collection import QueryableCollection
from metar_decoder.weather import WeatherDescriptor, Obscuration, Precipitation


class ReportCollection(QueryableCollection[Report]):
    """
    Queryable collection of decoded METAR/SPECI reports.

    Adds filters for:
    - Report kind (routine, special) and respect modifier
    - Station
    - Wind (calm, gusting)
    - Visibility
    - Present weather

    Example:
        reports = MetarParser.parse_many(lines)
        gusty = reports.for_station("KJFK").gusting(min_knots=25).all()
        df = reports.special().to_dataframe()
    """

    def __init__(self, items: List[Report]):
        super().__init__(items)

    # --- Kind filters ---

    def routine(self) -> 'ReportCollection':
        return self.filter(lambda r: r.kind == ReportKind.ROUTINE)

    def special(self) -> 'ReportCollection':
        return self.filter(lambda r: r.kind == ReportKind.SPECIAL)

    def automated(self) -> 'ReportCollection':
        return self.filter(lambda r: r.is_automated)

    def corrected(self) -> 'ReportCollection':
        return self.filter(lambda r: r.is_corrected)

    # --- Location filters ---

    def for_station(self, station: str) -> 'ReportCollection':
        """Reports from one station (case-insensitive)."""
        station_upper = station.upper()
        return self.filter(lambda r: r.station.upper() == station_upper)

    # --- Wind filters ---

    def calm(self) -> 'ReportCollection':
        return self.filter(lambda r: r.wind.is_calm)

    def gusting(self, min_knots: Optional[int] = None) -> 'ReportCollection':
        """
        Reports with a gust group.

        Args:
            min_knots: Only keep gusts at or above this speed
        """
        def matches(report: Report) -> bool:
            gust = report.wind.gust_knots
            if gust is None:
                return False
            return min_knots is None or gust >= min_knots
        return self.filter(matches)

    # --- Visibility filters ---

    def visibility_below(self, statute_miles: Union[int, float, Fraction]) -> 'ReportCollection':
        """Reports with visibility strictly below the given distance."""
        threshold = Fraction(statute_miles)
        return self.filter(
            lambda r: r.visibility is not None and r.visibility.distance_sm < threshold
        )

    # --- Weather filters ---

    def with_weather(
        self,
        precipitation: Optional[Precipitation] = None,
        obscuration: Optional[Obscuration] = None,
        descriptor: Optional[WeatherDescriptor] = None,
    ) -> 'ReportCollection':
        """
        Reports with at least one weather group matching every given criterion.

        With no criteria, keeps reports with any recognised weather group.

        Example:
            reports.with_weather(precipitation=Precipitation.SNOW)
            reports.with_weather(descriptor=WeatherDescriptor.THUNDERSTORM)
        """
        def group_matches(group) -> bool:
            if group.is_empty:
                return False
            if precipitation is not None and group.precipitation != precipitation:
                return False
            if obscuration is not None and group.obscuration != obscuration:
                return False
            if descriptor is not None and group.descriptor != descriptor:
                return False
            return True

        return self.filter(lambda r: any(group_matches(g) for g in r.weather))

    # --- Time ---

    def chronological(self, reference: Optional[datetime] = None) -> 'ReportCollection':
        """
        Sort by observation time, oldest first.

        Reports carry no month, so without a reference the sort is by
        day/hour/minute and assumes every report is from the same month.

        Args:
            reference: Date context; times are placed with ReportTime.resolve
                so batches crossing a month boundary sort correctly
        """
        if reference is None:
            return self.order_by(lambda r: (r.time.day, r.time.hour, r.time.minute))
        return self.order_by(lambda r: r.time.resolve(reference))

    def latest(self, reference: Optional[datetime] = None) -> Optional[Report]:
        """Most recent report, None if empty. See chronological()."""
        return self.chronological(reference).last()

    # --- Export ---

    def to_dataframe(self) -> pd.DataFrame:
        """
        One row per report with wind and visibility flattened into columns.

        Visibility is exported as float statute miles. Weather groups with
        recognised codes are joined by spaces.
        """
        columns = [
            'station', 'kind', 'day', 'hour', 'minute', 'respect_modifier',
            'wind_direction', 'wind_degrees', 'wind_speed_kt', 'wind_gust_kt',
            'variance_from', 'variance_to',
            'visibility_sm', 'visibility_less_than', 'weather',
        ]
        rows = []
        for report in self._items:
            wind = report.wind
            visibility = report.visibility
            rows.append({
                'station': report.station,
                'kind': report.kind.value,
                'day': report.time.day,
                'hour': report.time.hour,
                'minute': report.time.minute,
                'respect_modifier': report.respect_modifier.value,
                'wind_direction': wind.direction.kind.value,
                'wind_degrees': wind.direction.degrees,
                'wind_speed_kt': wind.speed_knots,
                'wind_gust_kt': wind.gust_knots,
                'variance_from': wind.variance[0] if wind.variance else None,
                'variance_to': wind.variance[1] if wind.variance else None,
                'visibility_sm': float(visibility.distance_sm) if visibility else None,
                'visibility_less_than': visibility.is_less_than if visibility else None,
                'weather': " ".join(g.code for g in report.weather if not g.is_empty),
            })
        return pd.DataFrame(rows, columns=columns)
