"""Decision pipeline - schedule, simulate, analyze, and advise in one pure run"""

import logging
from datetime import date, timedelta
from typing import List, Optional, Sequence, Tuple

from cashflow_decision.domain.anchors import analyze, derive_anchors
from cashflow_decision.domain.funding import recommend
from cashflow_decision.domain.models import (
    Anchor,
    AnchorDecision,
    DecisionReport,
    EventKind,
    Ledger,
    LedgerRow,
    PayPeriodSummary,
    Profile,
)
from cashflow_decision.domain.scheduler import schedule
from cashflow_decision.domain.simulator import simulate

logger = logging.getLogger(__name__)


def pay_period_dates(ledger: Ledger, profile: Profile, count: int = 2) -> List[date]:
    """
    Earliest pay date in the ledger and the following `count - 1` cycles.

    Each cycle is one cadence of the stream paid first, so a second earner
    paid a few days later does not shorten the period.
    """
    first = next((row for row in ledger.rows if row.event.kind == EventKind.INCOME), None)
    if first is None:
        return []
    cadence = next(
        (s.cadence_days for s in profile.income_streams if s.id == first.event.source_id),
        None,
    )
    if not cadence or cadence <= 0:
        return [first.date]
    return [first.date + timedelta(days=i * cadence) for i in range(count)]


def summarize_pay_periods(ledger: Ledger, profile: Profile, count: int = 2) -> Tuple[PayPeriodSummary, ...]:
    """
    Cash position up to each of the next `count` pay dates.

    Totals are cumulative from the start of the ledger, so the second
    period includes the first.
    """
    pay_dates = pay_period_dates(ledger, profile, count)

    summaries = []
    for pay_date in pay_dates:
        window = ledger.prefix(pay_date)
        inflow = sum(r.event.inflow for r in window)
        outflow = sum(r.event.outflow for r in window)
        summaries.append(
            PayPeriodSummary(
                pay_date=pay_date,
                inflow=inflow,
                outflow=outflow,
                surplus=ledger.starting_balance + inflow - outflow,
            )
        )
    return tuple(summaries)


def find_next_bill(ledger: Ledger, decisions: Sequence[AnchorDecision]) -> Optional[LedgerRow]:
    """Breach that blocks the earliest unsafe anchor, else the next outflow"""
    unsafe = [d.verdict for d in decisions if not d.verdict.safe]
    if unsafe:
        return min(unsafe, key=lambda v: v.anchor.date).breach
    for row in ledger.rows:
        if row.event.outflow > 0:
            return row
    return None


def evaluate(profile: Profile, anchors: Optional[Sequence[Anchor]] = None) -> DecisionReport:
    """
    Main entry point: run the full pipeline for one profile snapshot.

    Anchors default to the next due date of every obligation; callers may
    pass their own to choose which bills to judge.
    """
    events, warnings = schedule(profile)
    ledger = simulate(events, profile.starting_balance)

    if anchors is None:
        anchors = derive_anchors(profile)
    verdicts = analyze(ledger, anchors, profile.safety_floor)

    decisions: List[AnchorDecision] = []
    for verdict in verdicts:
        recommendation = None
        if not verdict.safe:
            recommendation = recommend(verdict, ledger, profile.revolving_sources)
        decisions.append(AnchorDecision(verdict=verdict, recommendation=recommendation))

    report = DecisionReport(
        events=events,
        warnings=warnings,
        ledger=ledger,
        decisions=tuple(decisions),
        next_bill=find_next_bill(ledger, decisions),
        pay_periods=summarize_pay_periods(ledger, profile),
    )

    logger.info(
        "Profile evaluated",
        extra={
            "step": "evaluate",
            "event_count": len(events),
            "warning_count": len(warnings),
            "anchor_count": len(decisions),
            "safe": report.safe,
        },
    )
    return report
