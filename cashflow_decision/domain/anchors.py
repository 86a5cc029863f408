"""Windowed safety analysis - each bill judged only on the ledger up to its due date"""

from typing import Iterable, List, Tuple

from cashflow_decision.domain.models import Anchor, AnchorVerdict, Ledger, Profile
from cashflow_decision.domain.scheduler import valid_due_day
from cashflow_decision.utils.date_utils import next_due_by_day


def derive_anchors(profile: Profile) -> Tuple[Anchor, ...]:
    """Next due date of every dated obligation with something owing"""
    anchors: List[Anchor] = []
    for obligation in profile.obligations:
        if not valid_due_day(obligation.due_day) or obligation.balance <= 0:
            continue
        anchors.append(
            Anchor(
                id=obligation.id,
                label=obligation.label,
                date=next_due_by_day(profile.today, obligation.due_day),
            )
        )
    return tuple(anchors)


def evaluate_anchor(ledger: Ledger, anchor: Anchor, floor: float) -> AnchorVerdict:
    """
    Verdict for a single anchor using only rows dated on or before it.

    A later recovery in the ledger never masks an earlier breach, and a
    breach after the anchor date does not count against it.
    """
    window = ledger.prefix(anchor.date)
    min_balance = ledger.starting_balance
    min_date = None
    breach = None

    for row in window:
        if min_date is None or row.balance < min_balance:
            min_balance = row.balance
            min_date = row.date
        if breach is None and row.balance < floor:
            breach = row

    return AnchorVerdict(
        anchor=anchor,
        floor=floor,
        safe=breach is None,
        min_balance=min_balance,
        min_date=min_date,
        breach=breach,
    )


def analyze(ledger: Ledger, anchors: Iterable[Anchor], floor: float) -> Tuple[AnchorVerdict, ...]:
    """Evaluate each anchor independently; windows may overlap"""
    return tuple(evaluate_anchor(ledger, anchor, floor) for anchor in anchors)
