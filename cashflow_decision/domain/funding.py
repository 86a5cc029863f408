"""Funding advice - minimal borrowing from revolving credit to cover a shortfall"""

from datetime import date
from typing import List, Optional, Sequence

from cashflow_decision.domain.models import (
    AnchorVerdict,
    EventKind,
    FundingDraw,
    FundingRecommendation,
    Ledger,
    Obligation,
)
from cashflow_decision.utils.date_utils import whole_days_between

NO_CAPACITY_ADVISORY = "No revolving credit capacity available; reduce or delay the obligation."


def estimate_interest(amount: float, rate_percent: float, days: int) -> float:
    """Simple, non-compounding interest on amount for a number of days"""
    if amount <= 0 or rate_percent <= 0 or days <= 0:
        return 0.0
    return amount * (rate_percent / 100) * (days / 365)


def next_inflow_date(ledger: Ledger, after: date) -> Optional[date]:
    """Date of the first pay event strictly after the given date"""
    for row in ledger.rows:
        if row.date > after and row.event.kind == EventKind.INCOME:
            return row.date
    return None


def ranked_sources(sources: Sequence[Obligation]) -> List[Obligation]:
    """
    Revolving sources with capacity, cheapest rate first.

    Sources without a rate go last. sorted() is stable, so equal rates keep
    declaration order.
    """
    usable = [s for s in sources if s.is_revolving and s.available_capacity > 0]
    return sorted(usable, key=lambda s: (s.annual_rate_percent <= 0, s.annual_rate_percent))


def recommend(
    verdict: AnchorVerdict,
    ledger: Ledger,
    revolving_sources: Sequence[Obligation],
    next_inflow: Optional[date] = None,
) -> Optional[FundingRecommendation]:
    """
    Cheapest borrowing that lifts the first breach back to the floor.

    Flow:
    1. shortfall = floor - balance at the first breach
    2. rank sources by rate, drop those with no capacity
    3. borrow min(shortfall, total capacity), drawing each source up to its
       own capacity in rate order
    4. interest per draw until the next pay date (at least one day)

    Returns None for a SAFE verdict. An UNSAFE verdict with no capacity
    yields an advisory recommendation instead of an error.
    """
    if verdict.safe or verdict.breach is None:
        return None

    shortfall = verdict.shortfall
    breach_date = verdict.breach.date
    if next_inflow is None:
        next_inflow = next_inflow_date(ledger, breach_date)
    if next_inflow is None and ledger.rows:
        next_inflow = ledger.rows[-1].date
    days = max(1, whole_days_between(breach_date, next_inflow))

    sources = ranked_sources(revolving_sources)
    if not sources:
        return FundingRecommendation(
            shortfall=shortfall,
            borrow_amount=0.0,
            primary=None,
            draws=(),
            days=days,
            estimated_interest=0.0,
            unfunded_remainder=shortfall,
            advisory=NO_CAPACITY_ADVISORY,
        )

    total_capacity = sum(s.available_capacity for s in sources)
    borrow_amount = min(shortfall, total_capacity)

    draws: List[FundingDraw] = []
    notes: List[str] = []
    remaining = borrow_amount
    for source in sources:
        if remaining <= 0:
            break
        amount = min(remaining, source.available_capacity)
        remaining -= amount
        draws.append(
            FundingDraw(
                source_id=source.id,
                label=source.label,
                rate_percent=source.annual_rate_percent,
                amount=amount,
                interest=estimate_interest(amount, source.annual_rate_percent, days),
            )
        )
        if source.annual_rate_percent <= 0:
            notes.append(f"rate missing for {source.label}; interest estimate assumes 0%")

    unfunded = shortfall - borrow_amount
    return FundingRecommendation(
        shortfall=shortfall,
        borrow_amount=borrow_amount,
        primary=draws[0],
        draws=tuple(draws),
        days=days,
        estimated_interest=sum(d.interest for d in draws),
        unfunded_remainder=unfunded if unfunded > 0 else 0.0,
        notes=tuple(notes),
    )
