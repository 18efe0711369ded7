"""Conversion of club-local times of day to and from UTC.

Price rules are stored with UTC "HH:MM" times and edited in the club's
local time. Only the time of day survives a conversion, so a result that
crosses midnight wraps around the 24-hour clock. Callers converting times
that belong to a concrete date should pass that date as ``reference_date``
so the correct daylight-saving offset is used.
"""
import logging
from datetime import date, datetime, timedelta
from typing import Optional

import pytz

from app.core.config import settings
from app.services.time_of_day import parse_time

logger = logging.getLogger(__name__)


class TimezoneConverter:
    """Converts times of day between a club timezone and UTC."""

    def __init__(self, default_timezone: str):
        """
        Initialize the converter.

        Args:
            default_timezone: IANA timezone used when a club's timezone is
                missing or not recognised

        Raises:
            ValueError: If the default timezone itself is unknown
        """
        try:
            pytz.timezone(default_timezone)
        except pytz.UnknownTimeZoneError:
            raise ValueError(f"Unknown default timezone '{default_timezone}'")
        self.default_timezone = default_timezone

    def resolve_timezone_name(self, name: Optional[str]) -> str:
        """Return ``name`` if it is a known IANA timezone, else the default."""
        if not name:
            return self.default_timezone

        try:
            pytz.timezone(name)
        except pytz.UnknownTimeZoneError:
            logger.warning(
                f"Invalid club timezone '{name}', falling back to {self.default_timezone}"
            )
            return self.default_timezone

        return name

    def get_timezone(self, name: Optional[str]):
        """Return the pytz timezone for ``name`` with the default fallback."""
        return pytz.timezone(self.resolve_timezone_name(name))

    def today(self, name: Optional[str]) -> date:
        """Current calendar date in the given timezone."""
        return datetime.now(pytz.UTC).astimezone(self.get_timezone(name)).date()

    def local_to_utc(
        self,
        time_str: str,
        timezone: Optional[str],
        reference_date: Optional[date] = None,
    ) -> str:
        """
        Convert a club-local "HH:MM" to the UTC time of day.

        Args:
            time_str: Local wall-clock time
            timezone: Club IANA timezone
            reference_date: Local date the time belongs to (defaults to today
                in the club timezone)

        Returns:
            UTC time of day as "HH:MM"
        """
        tz = self.get_timezone(timezone)
        ref = reference_date or self.today(timezone)

        local_dt = tz.localize(datetime.combine(ref, parse_time(time_str)))
        return local_dt.astimezone(pytz.UTC).strftime("%H:%M")

    def utc_to_local(
        self,
        time_str: str,
        timezone: Optional[str],
        reference_date: Optional[date] = None,
    ) -> str:
        """
        Convert a UTC "HH:MM" to the club-local time of day.

        The UTC instant is chosen so that it falls on ``reference_date`` in
        local time, which makes the offset of that local date apply.

        Args:
            time_str: UTC wall-clock time
            timezone: Club IANA timezone
            reference_date: Local date to convert for (defaults to today in
                the club timezone)

        Returns:
            Local time of day as "HH:MM"
        """
        tz = self.get_timezone(timezone)
        ref = reference_date or self.today(timezone)
        utc_time = parse_time(time_str)

        candidates = []
        for day_offset in (0, -1, 1):
            utc_dt = pytz.UTC.localize(
                datetime.combine(ref + timedelta(days=day_offset), utc_time)
            )
            local_dt = utc_dt.astimezone(tz)
            if local_dt.date() == ref:
                return local_dt.strftime("%H:%M")
            candidates.append(local_dt)

        return candidates[0].strftime("%H:%M")


# Singleton instance
timezone_converter = TimezoneConverter(settings.DEFAULT_CLUB_TIMEZONE)
