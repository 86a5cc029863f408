"""Event scheduling - expands a profile into dated cash movements"""

import logging
from datetime import date, timedelta
from typing import List, Optional, Tuple

from cashflow_decision.domain.models import (
    Event,
    EventKind,
    IncomeStream,
    Obligation,
    ObligationKind,
    PlannedItem,
    Profile,
    ScheduleWarning,
    TieBreak,
)
from cashflow_decision.utils.date_utils import monthly_occurrences, next_due_by_day, next_occurrence_after

logger = logging.getLogger(__name__)


def _warn(warnings: List[ScheduleWarning], code: str, message: str, source_id: Optional[str]) -> None:
    warnings.append(ScheduleWarning(code=code, message=message, source_id=source_id))
    logger.warning(message, extra={"warning_code": code, "source_id": source_id})


def expand_income(
    stream: IncomeStream,
    today: date,
    horizon_end: date,
    warnings: List[ScheduleWarning],
) -> List[Event]:
    """
    Pay events for one stream, strictly after today and up to horizon_end.

    Each pay date also carries the stream's per-pay deduction, if any.
    """
    if stream.cadence_days is None or stream.cadence_days <= 0:
        _warn(warnings, "non_positive_cadence", f"{stream.label}: pay cadence must be positive", stream.id)
        return []
    if stream.last_occurrence is None:
        _warn(warnings, "missing_anchor_date", f"{stream.label}: missing last pay date", stream.id)
        return []

    events = []
    step = timedelta(days=stream.cadence_days)
    pay_date = next_occurrence_after(today, stream.last_occurrence, stream.cadence_days)
    while pay_date <= horizon_end:
        events.append(
            Event(
                date=pay_date,
                label=f"{stream.label} pay",
                inflow=max(0.0, stream.amount),
                kind=EventKind.INCOME,
                source_id=stream.id,
            )
        )
        if stream.per_pay_outflow > 0:
            events.append(
                Event(
                    date=pay_date,
                    label=f"{stream.label}: {stream.per_pay_outflow_label}",
                    outflow=stream.per_pay_outflow,
                    kind=EventKind.PER_PAY_OUTFLOW,
                    source_id=stream.id,
                )
            )
        pay_date += step
    return events


def monthly_payment(obligation: Obligation) -> float:
    """
    Amount due each month.

    FixedFull pays the whole balance; RevolvingMinimum pays one month of
    simple interest (balance x rate / 1200).
    """
    if obligation.kind == ObligationKind.FIXED_FULL:
        return obligation.balance
    if obligation.annual_rate_percent > 0:
        return obligation.balance * (obligation.annual_rate_percent / 100) / 12
    return 0.0


def valid_due_day(due_day) -> bool:
    return isinstance(due_day, int) and not isinstance(due_day, bool) and 1 <= due_day <= 31


def expand_obligation(
    obligation: Obligation,
    today: date,
    horizon_end: date,
    warnings: List[ScheduleWarning],
) -> List[Event]:
    """Monthly due events for one obligation, on or after today"""
    if obligation.due_day is None:
        return []
    if not valid_due_day(obligation.due_day):
        _warn(
            warnings,
            "invalid_due_day",
            f"{obligation.label}: due day {obligation.due_day!r} is not between 1 and 31",
            obligation.id,
        )
        return []
    if obligation.balance <= 0:
        return []

    suffix = "full" if obligation.kind == ObligationKind.FIXED_FULL else "minimum"
    if obligation.is_revolving and obligation.annual_rate_percent <= 0:
        _warn(
            warnings,
            "rate_missing",
            f"{obligation.label}: rate missing, minimum assumed zero",
            obligation.id,
        )

    amount = monthly_payment(obligation)
    first = next_due_by_day(today, obligation.due_day)
    return [
        Event(
            date=due,
            label=f"{obligation.label} ({suffix})",
            outflow=amount,
            kind=EventKind.OBLIGATION,
            source_id=obligation.id,
        )
        for due in monthly_occurrences(first, obligation.due_day, horizon_end)
    ]


def planned_event(item: PlannedItem, today: date, horizon_end: date) -> Optional[Event]:
    if item.amount == 0 or not (today <= item.date <= horizon_end):
        return None
    return Event(
        date=item.date,
        label=item.label,
        inflow=-item.amount if item.amount < 0 else 0.0,
        outflow=item.amount if item.amount > 0 else 0.0,
        kind=EventKind.PLANNED,
        source_id=item.id,
    )


def order_events(events: List[Event], tie_break: TieBreak) -> Tuple[Event, ...]:
    """
    Stable sort by date, then by the same-day tie-break.

    Events in the same date and direction keep their generation order.
    """
    inflow_rank = 0 if tie_break == TieBreak.INCOME_FIRST else 1

    def sort_key(event: Event) -> tuple:
        rank = inflow_rank if event.is_inflow else 1 - inflow_rank
        return (event.date, rank)

    return tuple(sorted(events, key=sort_key))


def schedule(
    profile: Profile,
    today: Optional[date] = None,
    horizon_end: Optional[date] = None,
) -> Tuple[Tuple[Event, ...], Tuple[ScheduleWarning, ...]]:
    """
    Expand income, obligations and planned items into a sorted event list.

    Never raises for a structurally valid profile: bad recurrence data is
    reported as warnings and the offending source is left out. A zero-length
    window keeps only planned items dated today; recurring sources are still
    validated so their warnings are reported.
    """
    if today is None:
        today = profile.today
    if horizon_end is None:
        horizon_end = today + timedelta(days=max(0, profile.horizon_days))
    warnings: List[ScheduleWarning] = []
    recurring: List[Event] = []

    for stream in profile.income_streams:
        recurring.extend(expand_income(stream, today, horizon_end, warnings))

    for obligation in profile.obligations:
        recurring.extend(expand_obligation(obligation, today, horizon_end, warnings))

    events: List[Event] = recurring if horizon_end > today else []

    for item in profile.planned_items:
        event = planned_event(item, today, horizon_end)
        if event is not None:
            events.append(event)

    return order_events(events, profile.tie_break), tuple(warnings)
