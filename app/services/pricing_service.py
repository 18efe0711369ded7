"""Pricing service: price rules, timelines and quotes for stored courts."""
import logging
from datetime import date
from typing import Dict, List, Optional, Tuple

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.club import Club
from app.models.court import Court
from app.models.holiday import Holiday
from app.models.price_rule import CourtPriceRule
from app.schemas.price_rule import (
    PriceRuleCreate,
    PriceRuleLocal,
    PriceRuleRecord,
    PriceRuleUpdate,
    RuleType,
    RuleValidationError,
)
from app.schemas.pricing import (
    PriceQuoteResponse,
    PriceTimelineResponse,
    PricingResource,
)
from app.services.price_calculator import price_breakdown
from app.services.price_timeline import build_day_timeline
from app.services.rule_validator import (
    find_conflicting_rule,
    find_duplicate_rule,
    validate_rule,
)
from app.services.time_of_day import is_valid_time, normalize_time
from app.services.timezone_converter import TimezoneConverter, timezone_converter

logger = logging.getLogger(__name__)


class RuleValidationFailed(Exception):
    """A submitted rule did not pass validation."""

    def __init__(self, error: RuleValidationError):
        super().__init__(error.message)
        self.error = error


class RuleConflictError(Exception):
    """A submitted recurring rule overlaps an existing rule of the same scope."""

    def __init__(self, rule: PriceRuleLocal):
        super().__init__(
            f"Time range conflicts with existing {rule.rule_type.value} rule "
            f"({rule.start_time}-{rule.end_time})"
        )
        self.rule = rule


class PricingService:
    """Service for court price rules and price resolution."""

    def __init__(self, converter: Optional[TimezoneConverter] = None):
        self.converter = converter or timezone_converter

    async def _get_court_and_club(
        self, db: AsyncSession, court_id: int
    ) -> Tuple[Court, Club]:
        result = await db.execute(
            select(Court, Club)
            .join(Club, Court.club_id == Club.id)
            .where(Court.id == court_id)
        )
        row = result.one_or_none()

        if not row:
            raise ValueError(f"Court {court_id} not found")

        court, club = row
        return court, club

    async def _get_holidays(self, db: AsyncSession, club_id: int) -> Dict[int, date]:
        result = await db.execute(select(Holiday).where(Holiday.club_id == club_id))
        return {holiday.id: holiday.date for holiday in result.scalars().all()}

    async def _get_rules(self, db: AsyncSession, court_id: int) -> List[CourtPriceRule]:
        result = await db.execute(
            select(CourtPriceRule)
            .where(CourtPriceRule.court_id == court_id)
            .order_by(CourtPriceRule.id)
        )
        return list(result.scalars().all())

    async def _get_rule(
        self, db: AsyncSession, court_id: int, rule_id: int
    ) -> CourtPriceRule:
        result = await db.execute(
            select(CourtPriceRule).where(
                CourtPriceRule.id == rule_id,
                CourtPriceRule.court_id == court_id,
            )
        )
        rule = result.scalar_one_or_none()

        if not rule:
            raise ValueError(f"Price rule {rule_id} not found")

        return rule

    def _reference_date(self, rule, timezone: str, holidays: Dict[int, date]) -> date:
        """Local date whose UTC offset applies when converting ``rule``."""
        rule_type = RuleType(rule.rule_type)
        if rule_type == RuleType.SPECIFIC_DATE and rule.date:
            return rule.date
        if rule_type == RuleType.HOLIDAY and rule.holiday_id in holidays:
            return holidays[rule.holiday_id]
        return self.converter.today(timezone)

    def _to_local(
        self, rule: CourtPriceRule, timezone: str, holidays: Dict[int, date]
    ) -> PriceRuleLocal:
        ref = self._reference_date(rule, timezone, holidays)
        return PriceRuleLocal(
            id=rule.id,
            court_id=rule.court_id,
            rule_type=rule.rule_type,
            day_of_week=rule.day_of_week,
            date=rule.date,
            holiday_id=rule.holiday_id,
            start_time=self.converter.utc_to_local(rule.start_time, timezone, ref),
            end_time=self.converter.utc_to_local(rule.end_time, timezone, ref),
            price_cents=rule.price_cents,
            created_at=rule.created_at,
            updated_at=rule.updated_at,
            timezone=timezone,
        )

    def _keeps_window(self, current: PriceRuleLocal, candidate: PriceRuleCreate) -> bool:
        """Whether ``candidate`` repeats the scope and local window ``current`` is shown with."""
        if not (is_valid_time(candidate.start_time) and is_valid_time(candidate.end_time)):
            return False
        return (
            candidate.rule_type == current.rule_type.value
            and candidate.date == current.date
            and candidate.holiday_id == current.holiday_id
            and normalize_time(candidate.start_time) == current.start_time
            and normalize_time(candidate.end_time) == current.end_time
        )

    async def _check_candidate(
        self,
        db: AsyncSession,
        court: Court,
        club: Club,
        candidate: PriceRuleCreate,
        exclude_id: Optional[int] = None,
        allow_overnight: bool = False,
    ) -> Tuple[str, Dict[int, date]]:
        """
        Validate a local-time rule against the court's existing rules.

        ``allow_overnight`` accepts a window ending after local midnight, which
        an unchanged stored rule shows after a daylight-saving change.

        Returns:
            The resolved club timezone and the club's holidays

        Raises:
            RuleValidationFailed: If the rule or the resulting set is invalid
            RuleConflictError: If a recurring rule of the same scope overlaps
        """
        error = validate_rule(candidate, allow_overnight)
        if error is not None:
            raise RuleValidationFailed(error)

        timezone = self.converter.resolve_timezone_name(club.timezone)
        holidays = await self._get_holidays(db, club.id)

        if RuleType(candidate.rule_type) == RuleType.HOLIDAY and candidate.holiday_id not in holidays:
            raise RuleValidationFailed(
                RuleValidationError(
                    field="holiday_id",
                    message_key="holiday_not_found",
                    message=f"Holiday {candidate.holiday_id} not found for this club",
                )
            )

        existing = [
            self._to_local(rule, timezone, holidays)
            for rule in await self._get_rules(db, court.id)
            if rule.id != exclude_id
        ]

        error = find_duplicate_rule(existing + [candidate])
        if error is not None:
            raise RuleValidationFailed(error)

        conflict = find_conflicting_rule(existing, candidate)
        if conflict is not None:
            raise RuleConflictError(conflict)

        return timezone, holidays

    def _utc_fields(
        self, candidate: PriceRuleCreate, timezone: str, holidays: Dict[int, date]
    ) -> dict:
        """Column values for a validated local-time rule, times in UTC."""
        rule_type = RuleType(candidate.rule_type)
        ref = self._reference_date(candidate, timezone, holidays)
        return {
            "rule_type": rule_type.value,
            "day_of_week": candidate.day_of_week,
            "date": candidate.date,
            "holiday_id": candidate.holiday_id,
            "start_time": self.converter.local_to_utc(
                normalize_time(candidate.start_time), timezone, ref
            ),
            "end_time": self.converter.local_to_utc(
                normalize_time(candidate.end_time), timezone, ref
            ),
            "price_cents": candidate.price_cents,
        }

    async def get_pricing_resource(
        self, db: AsyncSession, court_id: int
    ) -> PricingResource:
        """Load everything needed to price a court."""
        court, club = await self._get_court_and_club(db, court_id)
        rules = await self._get_rules(db, court_id)
        holidays = await self._get_holidays(db, club.id)

        return PricingResource(
            timezone=self.converter.resolve_timezone_name(club.timezone),
            default_price_cents=court.default_price_cents or 0,
            rules=[PriceRuleRecord.model_validate(rule) for rule in rules],
            holidays=holidays,
        )

    async def get_timeline(
        self, db: AsyncSession, court_id: int, target_date: Optional[date] = None
    ) -> PriceTimelineResponse:
        """
        Get a court's price timeline for a local date.

        Args:
            db: Database session
            court_id: Court ID
            target_date: Club-local date (defaults to today in the club timezone)

        Returns:
            Timeline covering the whole day
        """
        resource = await self.get_pricing_resource(db, court_id)
        target_date = target_date or self.converter.today(resource.timezone)

        return PriceTimelineResponse(
            court_id=court_id,
            date=target_date,
            timezone=resource.timezone,
            segments=build_day_timeline(resource, target_date, self.converter),
        )

    async def get_quote(
        self,
        db: AsyncSession,
        court_id: int,
        target_date: date,
        start_time: str,
        duration_minutes: int,
    ) -> PriceQuoteResponse:
        """
        Price a booking of a court.

        Raises:
            ValueError: If the court is unknown or the interval is malformed
            BookingSpansMidnightError: If the booking crosses midnight
        """
        resource = await self.get_pricing_resource(db, court_id)
        timeline = build_day_timeline(resource, target_date, self.converter)
        quote = price_breakdown(timeline, start_time, duration_minutes)

        return PriceQuoteResponse(
            court_id=court_id,
            date=target_date,
            timezone=resource.timezone,
            **quote.model_dump(),
        )

    async def list_rules(self, db: AsyncSession, court_id: int) -> List[PriceRuleLocal]:
        """List a court's rules in club-local time."""
        court, club = await self._get_court_and_club(db, court_id)
        timezone = self.converter.resolve_timezone_name(club.timezone)
        holidays = await self._get_holidays(db, club.id)

        return [
            self._to_local(rule, timezone, holidays)
            for rule in await self._get_rules(db, court_id)
        ]

    async def get_rule(
        self, db: AsyncSession, court_id: int, rule_id: int
    ) -> PriceRuleLocal:
        """Get one rule in club-local time."""
        court, club = await self._get_court_and_club(db, court_id)
        rule = await self._get_rule(db, court_id, rule_id)
        timezone = self.converter.resolve_timezone_name(club.timezone)
        holidays = await self._get_holidays(db, club.id)
        return self._to_local(rule, timezone, holidays)

    async def validate_rule(
        self,
        db: AsyncSession,
        court_id: int,
        candidate: PriceRuleCreate,
        exclude_id: Optional[int] = None,
    ) -> Optional[RuleValidationError]:
        """Run every check create_rule would run, without storing anything."""
        court, club = await self._get_court_and_club(db, court_id)

        allow_overnight = False
        if exclude_id is not None:
            current = await self.get_rule(db, court_id, exclude_id)
            allow_overnight = self._keeps_window(current, candidate)

        try:
            await self._check_candidate(
                db, court, club, candidate, exclude_id, allow_overnight
            )
        except RuleValidationFailed as e:
            return e.error
        except RuleConflictError as e:
            return RuleValidationError(
                field="start_time",
                message_key="rule_conflict",
                message=str(e),
            )
        return None

    async def create_rule(
        self, db: AsyncSession, court_id: int, candidate: PriceRuleCreate
    ) -> PriceRuleLocal:
        """
        Validate and store a rule given in club-local time.

        Args:
            db: Database session
            court_id: Court ID
            candidate: Rule with local start and end times

        Returns:
            The stored rule, converted back to local time
        """
        court, club = await self._get_court_and_club(db, court_id)
        timezone, holidays = await self._check_candidate(db, court, club, candidate)

        rule = CourtPriceRule(
            court_id=court_id,
            **self._utc_fields(candidate, timezone, holidays),
        )
        db.add(rule)
        await db.commit()
        await db.refresh(rule)

        logger.info(
            f"Created {rule.rule_type} price rule {rule.id} for court {court_id} "
            f"({rule.start_time}-{rule.end_time} UTC, {rule.price_cents} cents/h)"
        )
        return self._to_local(rule, timezone, holidays)

    async def update_rule(
        self,
        db: AsyncSession,
        court_id: int,
        rule_id: int,
        rule_update: PriceRuleUpdate,
    ) -> PriceRuleLocal:
        """Apply a partial update given in club-local time."""
        court, club = await self._get_court_and_club(db, court_id)
        rule = await self._get_rule(db, court_id, rule_id)
        timezone = self.converter.resolve_timezone_name(club.timezone)
        current = self._to_local(rule, timezone, await self._get_holidays(db, club.id))

        merged = {
            "rule_type": current.rule_type.value,
            "day_of_week": current.day_of_week,
            "date": current.date,
            "holiday_id": current.holiday_id,
            "start_time": current.start_time,
            "end_time": current.end_time,
            "price_cents": current.price_cents,
        }
        for field, value in rule_update.model_dump(exclude_unset=True).items():
            # Kind-specific fields may be cleared, the others only replaced
            if value is None and field not in ("day_of_week", "date", "holiday_id"):
                continue
            merged[field] = value
        candidate = PriceRuleCreate(**merged)
        keeps_window = self._keeps_window(current, candidate)

        timezone, holidays = await self._check_candidate(
            db, court, club, candidate, exclude_id=rule_id, allow_overnight=keeps_window
        )
        fields = self._utc_fields(candidate, timezone, holidays)
        if keeps_window:
            # Stored UTC times stay as entered
            fields.pop("start_time")
            fields.pop("end_time")
        for field, value in fields.items():
            setattr(rule, field, value)

        await db.commit()
        await db.refresh(rule)

        logger.info(f"Updated price rule {rule_id} for court {court_id}")
        return self._to_local(rule, timezone, holidays)

    async def delete_rule(self, db: AsyncSession, court_id: int, rule_id: int) -> None:
        """Delete a rule."""
        rule = await self._get_rule(db, court_id, rule_id)
        await db.delete(rule)
        await db.commit()
        logger.info(f"Deleted price rule {rule_id} for court {court_id}")


# Singleton instance
pricing_service = PricingService()
