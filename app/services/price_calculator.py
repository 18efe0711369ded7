"""Price of a booking interval over a day timeline."""
from fractions import Fraction
from typing import Iterator, List, Tuple

from app.schemas.pricing import DaySegment, PriceBreakdownItem, PriceQuote
from app.services.time_of_day import (
    MINUTES_PER_DAY,
    is_valid_time,
    minutes_to_time,
    time_to_minutes,
)


class BookingSpansMidnightError(ValueError):
    """Raised when a booking interval would continue into the next date."""


def _round_cents(amount: Fraction) -> int:
    """Round half up to a whole cent."""
    return int(amount + Fraction(1, 2))


def _booking_window(start_time: str, duration_minutes: int) -> Tuple[int, int]:
    if not is_valid_time(start_time):
        raise ValueError(f"Invalid start time '{start_time}', expected HH:MM")
    if isinstance(duration_minutes, bool) or not isinstance(duration_minutes, int) or duration_minutes <= 0:
        raise ValueError("duration_minutes must be a positive integer")

    start = time_to_minutes(start_time)
    end = start + duration_minutes
    if end > MINUTES_PER_DAY:
        raise BookingSpansMidnightError(
            f"Booking from {start_time} for {duration_minutes} minutes crosses midnight"
        )
    return start, end


def _overlaps(
    timeline: List[DaySegment], start: int, end: int
) -> Iterator[Tuple[int, int, int]]:
    """Yield (overlap_start, overlap_end, price_cents) covering [start, end)."""
    covered_until = start
    for segment in sorted(timeline, key=lambda s: time_to_minutes(s.start)):
        seg_start = time_to_minutes(segment.start)
        seg_end = time_to_minutes(segment.end)
        if seg_end <= covered_until:
            continue
        if seg_start >= end:
            break
        if seg_start > covered_until:
            break

        overlap_end = min(end, seg_end)
        yield covered_until, overlap_end, segment.price_cents
        covered_until = overlap_end
        if covered_until >= end:
            return

    raise ValueError(
        f"Timeline does not cover {minutes_to_time(covered_until)}-{minutes_to_time(end)}"
    )


def price_for_interval(
    timeline: List[DaySegment], start_time: str, duration_minutes: int
) -> int:
    """
    Total price in cents for a booking within one date.

    Each overlapped segment contributes price_cents * minutes / 60. The sum
    is rounded once, half up, to a whole cent.

    Raises:
        BookingSpansMidnightError: If the interval passes 24:00
        ValueError: On a malformed start time, a non-positive duration or a
            timeline with a gap inside the interval
    """
    start, end = _booking_window(start_time, duration_minutes)

    total = Fraction(0)
    for overlap_start, overlap_end, price_cents in _overlaps(timeline, start, end):
        total += Fraction(price_cents * (overlap_end - overlap_start), 60)

    return _round_cents(total)


def price_breakdown(
    timeline: List[DaySegment], start_time: str, duration_minutes: int
) -> PriceQuote:
    """Price a booking and list the portion charged at each rate."""
    start, end = _booking_window(start_time, duration_minutes)

    breakdown = []
    for overlap_start, overlap_end, price_cents in _overlaps(timeline, start, end):
        minutes = overlap_end - overlap_start
        breakdown.append(
            PriceBreakdownItem(
                start=minutes_to_time(overlap_start),
                end=minutes_to_time(overlap_end),
                minutes=minutes,
                rate_cents=price_cents,
                price_cents=_round_cents(Fraction(price_cents * minutes, 60)),
            )
        )

    return PriceQuote(
        start_time=minutes_to_time(start),
        end_time=minutes_to_time(end),
        duration_minutes=duration_minutes,
        total_price_cents=price_for_interval(timeline, start_time, duration_minutes),
        breakdown=breakdown,
    )
