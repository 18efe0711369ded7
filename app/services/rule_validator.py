"""Validation of price rules and rule sets.

The same functions back live form feedback and the checks performed before
a rule is persisted. They are pure: no storage, no network, no exceptions
for user-correctable input. Each returns ``None`` when everything is fine or
the first ``RuleValidationError`` found.
"""
from typing import Iterable, Optional

from app.schemas.price_rule import RuleType, RuleValidationError
from app.services.time_of_day import is_valid_time, normalize_time, time_ranges_overlap

# Field each kind requires; every other kind-specific field must be empty
KIND_SPECIFIC_FIELDS = {
    RuleType.SPECIFIC_DAY: "day_of_week",
    RuleType.SPECIFIC_DATE: "date",
    RuleType.HOLIDAY: "holiday_id",
}

RECURRING_RULE_TYPES = (
    RuleType.SPECIFIC_DAY,
    RuleType.WEEKDAYS,
    RuleType.WEEKENDS,
    RuleType.ALL_DAYS,
)


def _error(field: str, message_key: str, message: str) -> RuleValidationError:
    return RuleValidationError(field=field, message_key=message_key, message=message)


def parse_rule_type(value) -> Optional[RuleType]:
    """Return the RuleType for ``value`` or None if it is not one."""
    try:
        return RuleType(value)
    except ValueError:
        return None


def validate_rule(rule, allow_overnight: bool = False) -> Optional[RuleValidationError]:
    """
    Validate a single rule.

    Args:
        rule: Any object exposing rule_type, day_of_week, date, holiday_id,
            start_time, end_time and price_cents
        allow_overnight: Accept an end before the start, for stored windows
            that run past local midnight

    Returns:
        The first error found, or None if the rule is valid
    """
    rule_type = parse_rule_type(rule.rule_type)
    if rule_type is None:
        valid = ", ".join(t.value for t in RuleType)
        return _error(
            "rule_type",
            "rule_type_invalid",
            f"Invalid rule type '{rule.rule_type}'. Must be one of: {valid}",
        )

    for field in ("start_time", "end_time"):
        if not is_valid_time(getattr(rule, field)):
            return _error(
                field,
                "time_format_invalid",
                "Invalid time format. Use HH:MM format (00:00-23:59)",
            )

    start, end = normalize_time(rule.start_time), normalize_time(rule.end_time)
    if start == end or (start > end and not allow_overnight):
        return _error("end_time", "start_not_before_end", "start_time must be before end_time")

    if isinstance(rule.price_cents, bool) or not isinstance(rule.price_cents, int) or rule.price_cents <= 0:
        return _error("price_cents", "price_not_positive", "price_cents must be a positive integer")

    required = KIND_SPECIFIC_FIELDS.get(rule_type)
    for field in KIND_SPECIFIC_FIELDS.values():
        value = getattr(rule, field, None)
        if field == required and value is None:
            return _error(
                field,
                f"{field}_required",
                f"{field} is required for {rule_type.value} rules",
            )
        if field != required and value is not None:
            return _error(
                field,
                f"{field}_not_allowed",
                f"{field} must be empty for {rule_type.value} rules",
            )

    if rule_type == RuleType.SPECIFIC_DAY:
        day = rule.day_of_week
        if isinstance(day, bool) or not isinstance(day, int) or not 0 <= day <= 6:
            return _error(
                "day_of_week",
                "day_of_week_out_of_range",
                "day_of_week must be a number between 0 (Sunday) and 6 (Saturday)",
            )

    return None


def find_duplicate_rule(rules: Iterable) -> Optional[RuleValidationError]:
    """Report a second SPECIFIC_DATE rule for a date or HOLIDAY rule for a holiday."""
    seen_dates = set()
    seen_holidays = set()

    for rule in rules:
        rule_type = parse_rule_type(rule.rule_type)
        if rule_type == RuleType.SPECIFIC_DATE:
            if rule.date in seen_dates:
                return _error(
                    "date",
                    "duplicate_date",
                    f"A SPECIFIC_DATE rule for {rule.date.isoformat()} already exists",
                )
            seen_dates.add(rule.date)
        elif rule_type == RuleType.HOLIDAY:
            if rule.holiday_id in seen_holidays:
                return _error(
                    "holiday_id",
                    "duplicate_holiday",
                    f"A HOLIDAY rule for holiday {rule.holiday_id} already exists",
                )
            seen_holidays.add(rule.holiday_id)

    return None


def validate_rule_set(rules: Iterable) -> Optional[RuleValidationError]:
    """
    Validate all rules of a court together.

    Every rule must be valid on its own, no two SPECIFIC_DATE rules may share
    a date and no two HOLIDAY rules may share a holiday. Rules of different
    kinds may overlap in time of day; precedence resolves them later.
    """
    rules = list(rules)
    for index, rule in enumerate(rules):
        error = validate_rule(rule)
        if error is not None:
            error.message = f"Rule #{index + 1}: {error.message}"
            return error

    return find_duplicate_rule(rules)


def find_conflicting_rule(rules: Iterable, candidate, exclude_id=None):
    """
    Find a recurring rule of the same scope whose window overlaps ``candidate``.

    Same scope means the same rule type and, for SPECIFIC_DAY, the same
    weekday. All rules are expected to be valid and in the same time frame;
    windows may run past midnight.

    Returns:
        The first conflicting rule, or None
    """
    rule_type = RuleType(candidate.rule_type)
    if rule_type not in RECURRING_RULE_TYPES:
        return None

    for rule in rules:
        if exclude_id is not None and rule.id == exclude_id:
            continue
        if RuleType(rule.rule_type) != rule_type:
            continue
        if rule_type == RuleType.SPECIFIC_DAY and rule.day_of_week != candidate.day_of_week:
            continue
        if time_ranges_overlap(
            normalize_time(candidate.start_time),
            normalize_time(candidate.end_time),
            rule.start_time,
            rule.end_time,
        ):
            return rule

    return None
