"""Resolution of a court's price rules into a timeline for one date.

Rule kinds rank, highest first:

    SPECIFIC_DATE = HOLIDAY > SPECIFIC_DAY > WEEKDAYS = WEEKENDS > ALL_DAYS

and the court's default price fills every minute no active rule covers.
Within one rank the most recently created rule wins.

Day-of-week convention: 0 = Sunday, 1 = Monday, ..., 6 = Saturday.
"""
import logging
from datetime import date, datetime, timedelta
from itertools import groupby
from typing import Dict, Iterator, List, Optional, Tuple

from app.schemas.price_rule import RuleType
from app.schemas.pricing import DaySegment, PricingResource
from app.services.time_of_day import MINUTES_PER_DAY, minutes_to_time, time_to_minutes
from app.services.timezone_converter import TimezoneConverter, timezone_converter

logger = logging.getLogger(__name__)

PRECEDENCE = {
    RuleType.SPECIFIC_DATE: 3,
    RuleType.HOLIDAY: 3,
    RuleType.SPECIFIC_DAY: 2,
    RuleType.WEEKDAYS: 1,
    RuleType.WEEKENDS: 1,
    RuleType.ALL_DAYS: 0,
}


def day_of_week(target_date: date) -> int:
    """Weekday number with Sunday=0 (date.weekday() uses Monday=0)."""
    return target_date.isoweekday() % 7


def is_rule_active(rule, target_date: date, holidays: Optional[Dict[int, date]] = None) -> bool:
    """Whether ``rule`` applies to ``target_date``."""
    rule_type = RuleType(rule.rule_type)

    if rule_type == RuleType.SPECIFIC_DATE:
        return rule.date == target_date
    if rule_type == RuleType.HOLIDAY:
        return (holidays or {}).get(rule.holiday_id) == target_date
    if rule_type == RuleType.SPECIFIC_DAY:
        return rule.day_of_week == day_of_week(target_date)
    if rule_type == RuleType.WEEKDAYS:
        return 1 <= day_of_week(target_date) <= 5
    if rule_type == RuleType.WEEKENDS:
        return day_of_week(target_date) in (0, 6)
    return True


def _precedence_key(rule):
    return (
        PRECEDENCE[RuleType(rule.rule_type)],
        rule.created_at is not None,
        rule.created_at or datetime.min,
        rule.id or 0,
    )


def _local_windows(
    rule,
    timezone: str,
    target_date: date,
    holidays: Dict[int, date],
    converter: TimezoneConverter,
) -> Iterator[Tuple[int, int]]:
    """
    Local [start, end) minutes a stored rule covers on ``target_date``.

    A window whose local end is not after its local start crosses midnight:
    [start, 24:00) belongs to the occurrence starting on ``target_date`` and
    [00:00, end) to the one started the day before.
    """
    start = time_to_minutes(converter.utc_to_local(rule.start_time, timezone, target_date))
    end = time_to_minutes(converter.utc_to_local(rule.end_time, timezone, target_date))

    if end > start:
        if is_rule_active(rule, target_date, holidays):
            yield start, end
        return

    if is_rule_active(rule, target_date, holidays):
        yield start, MINUTES_PER_DAY
    if end > 0 and is_rule_active(rule, target_date - timedelta(days=1), holidays):
        yield 0, end


def build_day_timeline(
    resource: PricingResource,
    target_date: date,
    converter: Optional[TimezoneConverter] = None,
) -> List[DaySegment]:
    """
    Build the ordered, gap-free price timeline of one local date.

    Args:
        resource: Court pricing data with rules stored in UTC
        target_date: Club-local date
        converter: Timezone converter (defaults to the configured one)

    Returns:
        Segments partitioning [00:00, 24:00) with adjacent equal prices merged
    """
    converter = converter or timezone_converter
    timezone = converter.resolve_timezone_name(resource.timezone)

    rules = sorted(resource.rules, key=_precedence_key, reverse=True)

    prices: List[Optional[int]] = [None] * MINUTES_PER_DAY
    applied = 0
    for rule in rules:
        windows = list(
            _local_windows(rule, timezone, target_date, resource.holidays, converter)
        )
        if windows:
            applied += 1
        for start, end in windows:
            for minute in range(start, end):
                if prices[minute] is None:
                    prices[minute] = rule.price_cents

    effective = [
        resource.default_price_cents if price is None else price
        for price in prices
    ]

    segments = []
    minute = 0
    for price, run in groupby(effective):
        length = sum(1 for _ in run)
        segments.append(
            DaySegment(
                start=minutes_to_time(minute),
                end=minutes_to_time(minute + length),
                price_cents=price,
            )
        )
        minute += length

    logger.debug(
        f"Built timeline for {target_date} ({timezone}): "
        f"{applied} applied rules, {len(segments)} segments"
    )
    return segments
