"""Mapping between API schemas and immutable domain snapshots"""

from datetime import date
from typing import List, Optional

from cashflow_decision.api.v1.schemas import (
    AnchorSchema,
    DecisionResponse,
    EventSchema,
    FundingDrawSchema,
    FundingSchema,
    LedgerRowSchema,
    PayPeriodSchema,
    ProfileRequest,
    VerdictSchema,
    WarningSchema,
)
from cashflow_decision.domain.exceptions import InvalidProfileError
from cashflow_decision.domain.models import (
    Anchor,
    AnchorDecision,
    DecisionReport,
    Event,
    FundingDraw,
    FundingRecommendation,
    IncomeStream,
    LedgerRow,
    Obligation,
    PlannedItem,
    Profile,
    ScheduleWarning,
)


def money(value: float) -> float:
    """Round to cents; only ever applied on the way out"""
    return round(value, 2)


def _check_unique(kind: str, ids: List[str]) -> None:
    seen = set()
    for item_id in ids:
        if item_id in seen:
            raise InvalidProfileError(f"Duplicate {kind} id: {item_id}")
        seen.add(item_id)


def to_profile(request: ProfileRequest, today: Optional[date] = None) -> Profile:
    """
    Build the domain snapshot from a validated request.

    Raises:
        InvalidProfileError: On duplicate ids within a collection
    """
    _check_unique("income stream", [s.id for s in request.income_streams])
    _check_unique("obligation", [o.id for o in request.obligations])
    _check_unique("planned item", [p.id for p in request.planned_items])

    return Profile(
        today=request.today or today or date.today(),
        starting_balance=request.starting_balance,
        safety_floor=request.safety_floor,
        horizon_days=request.horizon_days,
        tie_break=request.tie_break,
        income_streams=tuple(
            IncomeStream(
                id=s.id,
                label=s.label,
                cadence_days=s.cadence_days,
                last_occurrence=s.last_occurrence,
                amount=s.amount,
                per_pay_outflow=s.per_pay_outflow,
                per_pay_outflow_label=s.per_pay_outflow_label,
            )
            for s in request.income_streams
        ),
        obligations=tuple(
            Obligation(
                id=o.id,
                label=o.label,
                kind=o.kind,
                due_day=o.due_day,
                balance=o.balance,
                annual_rate_percent=o.annual_rate_percent,
                credit_limit=o.credit_limit,
            )
            for o in request.obligations
        ),
        planned_items=tuple(
            PlannedItem(id=p.id, label=p.label, date=p.date, amount=p.amount)
            for p in request.planned_items
        ),
    )


def to_anchors(request: ProfileRequest) -> Optional[List[Anchor]]:
    """Explicit anchors from the request, or None to derive them"""
    if request.anchors is None:
        return None
    _check_unique("anchor", [a.id for a in request.anchors])
    return [Anchor(id=a.id, label=a.label, date=a.date) for a in request.anchors]


def event_schema(event: Event) -> EventSchema:
    return EventSchema(
        date=event.date,
        label=event.label,
        inflow=money(event.inflow),
        outflow=money(event.outflow),
        kind=event.kind.value,
        source_id=event.source_id,
    )


def row_schema(row: Optional[LedgerRow]) -> Optional[LedgerRowSchema]:
    if row is None:
        return None
    event = row.event
    return LedgerRowSchema(
        date=event.date,
        label=event.label,
        inflow=money(event.inflow),
        outflow=money(event.outflow),
        kind=event.kind.value,
        source_id=event.source_id,
        balance=money(row.balance),
    )


def warning_schema(warning: ScheduleWarning) -> WarningSchema:
    return WarningSchema(code=warning.code, message=warning.message, source_id=warning.source_id)


def _draw_schema(draw: FundingDraw) -> FundingDrawSchema:
    return FundingDrawSchema(
        source_id=draw.source_id,
        label=draw.label,
        rate_percent=draw.rate_percent,
        amount=money(draw.amount),
        interest=money(draw.interest),
    )


def funding_schema(recommendation: Optional[FundingRecommendation]) -> Optional[FundingSchema]:
    if recommendation is None:
        return None
    return FundingSchema(
        shortfall=money(recommendation.shortfall),
        borrow_amount=money(recommendation.borrow_amount),
        primary=_draw_schema(recommendation.primary) if recommendation.primary else None,
        draws=[_draw_schema(d) for d in recommendation.draws],
        days=recommendation.days,
        estimated_interest=money(recommendation.estimated_interest),
        unfunded_remainder=money(recommendation.unfunded_remainder),
        advisory=recommendation.advisory,
        notes=list(recommendation.notes),
    )


def verdict_schema(decision: AnchorDecision) -> VerdictSchema:
    verdict = decision.verdict
    return VerdictSchema(
        anchor=AnchorSchema(id=verdict.anchor.id, label=verdict.anchor.label, date=verdict.anchor.date),
        safe=verdict.safe,
        min_balance=money(verdict.min_balance),
        min_date=verdict.min_date,
        breach=row_schema(verdict.breach),
        shortfall=money(verdict.shortfall),
        funding=funding_schema(decision.recommendation),
    )


def decision_response(profile: Profile, report: DecisionReport) -> DecisionResponse:
    return DecisionResponse(
        safe=report.safe,
        today=profile.today,
        starting_balance=money(profile.starting_balance),
        min_balance=money(report.ledger.min_balance),
        min_date=report.ledger.min_date,
        next_bill=row_schema(report.next_bill),
        verdicts=[verdict_schema(d) for d in report.decisions],
        pay_periods=[
            PayPeriodSchema(
                pay_date=p.pay_date,
                inflow=money(p.inflow),
                outflow=money(p.outflow),
                surplus=money(p.surplus),
            )
            for p in report.pay_periods
        ],
        ledger=[row_schema(row) for row in report.ledger.rows],
        warnings=[warning_schema(w) for w in report.warnings],
    )
