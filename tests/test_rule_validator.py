"""
Tests for price rule validation.

Verifies that the validator:
- Reports one structured, user-correctable error per invalid rule
- Enforces the kind-specific field of each rule type
- Rejects duplicate SPECIFIC_DATE dates and HOLIDAY holidays in a set
- Allows different kinds to overlap, but not recurring rules of one scope
"""

from datetime import date

from app.schemas.price_rule import PriceRuleCreate, PriceRuleRecord
from app.services.rule_validator import (
    find_conflicting_rule,
    find_duplicate_rule,
    validate_rule,
    validate_rule_set,
)


def make_rule(**overrides):
    data = {
        "rule_type": "WEEKDAYS",
        "start_time": "09:00",
        "end_time": "12:00",
        "price_cents": 1500,
    }
    data.update(overrides)
    return PriceRuleCreate(**data)


class TestValidateRule:
    """Tests for validate_rule."""

    def test_valid_weekday_rule(self):
        assert validate_rule(make_rule()) is None

    def test_valid_rule_of_each_kind(self):
        rules = [
            make_rule(rule_type="SPECIFIC_DAY", day_of_week=0),
            make_rule(rule_type="WEEKENDS"),
            make_rule(rule_type="ALL_DAYS"),
            make_rule(rule_type="SPECIFIC_DATE", date=date(2026, 1, 6)),
            make_rule(rule_type="HOLIDAY", holiday_id=3),
        ]
        assert [validate_rule(rule) for rule in rules] == [None] * 5

    def test_unknown_rule_type(self):
        error = validate_rule(make_rule(rule_type="FULL_MOON"))
        assert error.field == "rule_type"
        assert error.message_key == "rule_type_invalid"

    def test_malformed_time(self):
        error = validate_rule(make_rule(start_time="25:00"))
        assert error.field == "start_time"
        assert error.message_key == "time_format_invalid"

        error = validate_rule(make_rule(end_time="noon"))
        assert error.field == "end_time"

    def test_start_must_be_before_end(self):
        error = validate_rule(make_rule(start_time="12:00", end_time="12:00"))
        assert error.message_key == "start_not_before_end"

        error = validate_rule(make_rule(start_time="13:00", end_time="12:00"))
        assert error.message_key == "start_not_before_end"

    def test_overnight_window_only_when_allowed(self):
        overnight = make_rule(rule_type="ALL_DAYS", start_time="23:00", end_time="01:00")
        assert validate_rule(overnight).message_key == "start_not_before_end"
        assert validate_rule(overnight, allow_overnight=True) is None

        empty = make_rule(start_time="12:00", end_time="12:00")
        assert validate_rule(empty, allow_overnight=True).message_key == "start_not_before_end"

    def test_times_compared_zero_padded(self):
        """ "9:00" sorts after "10:00" as text but is earlier once padded."""
        assert validate_rule(make_rule(start_time="9:00", end_time="10:00")) is None

    def test_price_must_be_positive(self):
        error = validate_rule(make_rule(price_cents=0))
        assert error.field == "price_cents"
        assert error.message_key == "price_not_positive"

        assert validate_rule(make_rule(price_cents=-100)).message_key == "price_not_positive"

    def test_specific_day_requires_day_of_week(self):
        error = validate_rule(make_rule(rule_type="SPECIFIC_DAY"))
        assert error.field == "day_of_week"
        assert error.message_key == "day_of_week_required"

    def test_day_of_week_range(self):
        error = validate_rule(make_rule(rule_type="SPECIFIC_DAY", day_of_week=7))
        assert error.message_key == "day_of_week_out_of_range"

    def test_specific_date_requires_date(self):
        error = validate_rule(make_rule(rule_type="SPECIFIC_DATE"))
        assert error.field == "date"
        assert error.message_key == "date_required"

    def test_holiday_requires_holiday_id(self):
        error = validate_rule(make_rule(rule_type="HOLIDAY"))
        assert error.message_key == "holiday_id_required"

    def test_other_kind_fields_must_be_empty(self):
        error = validate_rule(make_rule(date=date(2026, 1, 6)))
        assert error.field == "date"
        assert error.message_key == "date_not_allowed"

        error = validate_rule(make_rule(rule_type="HOLIDAY", holiday_id=1, day_of_week=2))
        assert error.message_key == "day_of_week_not_allowed"


class TestValidateRuleSet:
    """Tests for validate_rule_set."""

    def test_duplicate_specific_date(self):
        rules = [
            make_rule(rule_type="SPECIFIC_DATE", date=date(2026, 1, 6)),
            make_rule(
                rule_type="SPECIFIC_DATE", date=date(2026, 1, 6),
                start_time="14:00", end_time="16:00",
            ),
        ]
        error = validate_rule_set(rules)
        assert error.field == "date"
        assert error.message_key == "duplicate_date"

    def test_duplicate_holiday(self):
        rules = [
            make_rule(rule_type="HOLIDAY", holiday_id=1),
            make_rule(rule_type="HOLIDAY", holiday_id=1, start_time="18:00", end_time="20:00"),
        ]
        assert validate_rule_set(rules).message_key == "duplicate_holiday"

    def test_different_kinds_may_overlap(self):
        rules = [
            make_rule(),
            make_rule(rule_type="ALL_DAYS"),
            make_rule(rule_type="SPECIFIC_DAY", day_of_week=2),
            make_rule(rule_type="SPECIFIC_DATE", date=date(2026, 1, 6)),
            make_rule(rule_type="SPECIFIC_DATE", date=date(2026, 1, 7)),
            make_rule(rule_type="HOLIDAY", holiday_id=1),
        ]
        assert validate_rule_set(rules) is None

    def test_invalid_member_is_reported_with_its_position(self):
        error = validate_rule_set([make_rule(), make_rule(price_cents=0)])
        assert error.message_key == "price_not_positive"
        assert error.message.startswith("Rule #2")

    def test_empty_set_is_valid(self):
        assert validate_rule_set([]) is None
        assert find_duplicate_rule([]) is None


class TestFindConflictingRule:
    """Tests for find_conflicting_rule."""

    def setup_method(self):
        self.existing = [
            PriceRuleRecord(id=1, rule_type="WEEKDAYS", start_time="09:00", end_time="12:00", price_cents=1500),
            PriceRuleRecord(id=2, rule_type="SPECIFIC_DAY", day_of_week=1, start_time="18:00", end_time="20:00", price_cents=2000),
        ]

    def test_overlapping_same_kind_conflicts(self):
        conflict = find_conflicting_rule(self.existing, make_rule(start_time="11:00", end_time="13:00"))
        assert conflict.id == 1

    def test_adjacent_windows_do_not_conflict(self):
        assert find_conflicting_rule(self.existing, make_rule(start_time="12:00", end_time="14:00")) is None

    def test_specific_day_conflicts_only_on_same_weekday(self):
        monday = make_rule(rule_type="SPECIFIC_DAY", day_of_week=1, start_time="19:00", end_time="21:00")
        tuesday = make_rule(rule_type="SPECIFIC_DAY", day_of_week=2, start_time="19:00", end_time="21:00")
        assert find_conflicting_rule(self.existing, monday).id == 2
        assert find_conflicting_rule(self.existing, tuesday) is None

    def test_other_kinds_do_not_conflict(self):
        assert find_conflicting_rule(self.existing, make_rule(rule_type="ALL_DAYS")) is None
        specific = make_rule(rule_type="SPECIFIC_DATE", date=date(2026, 1, 6))
        assert find_conflicting_rule(self.existing, specific) is None

    def test_excluded_rule_is_ignored(self):
        assert find_conflicting_rule(self.existing, make_rule(), exclude_id=1) is None

    def test_window_past_midnight_conflicts_on_both_sides(self):
        existing = [
            PriceRuleRecord(id=3, rule_type="ALL_DAYS", start_time="23:00", end_time="01:00", price_cents=3000),
        ]
        after_midnight = make_rule(rule_type="ALL_DAYS", start_time="00:00", end_time="00:30")
        before_midnight = make_rule(rule_type="ALL_DAYS", start_time="22:00", end_time="23:30")
        daytime = make_rule(rule_type="ALL_DAYS", start_time="01:00", end_time="23:00")
        assert find_conflicting_rule(existing, after_midnight).id == 3
        assert find_conflicting_rule(existing, before_midnight).id == 3
        assert find_conflicting_rule(existing, daytime) is None
