"""Running-balance simulation over a sorted event sequence"""

from typing import Iterable, List

from cashflow_decision.domain.models import Event, Ledger, LedgerRow


def simulate(events: Iterable[Event], starting_balance: float) -> Ledger:
    """
    Walk events in order and record the balance after each one.

    Money stays unrounded here; rounding happens only when presenting.
    The minimum is taken over rows and its date is where it first occurs.
    """
    balance = starting_balance
    rows: List[LedgerRow] = []
    min_balance = None
    min_date = None

    for event in events:
        balance = balance + event.inflow - event.outflow
        rows.append(LedgerRow(event=event, balance=balance))
        if min_balance is None or balance < min_balance:
            min_balance = balance
            min_date = event.date

    return Ledger(
        starting_balance=starting_balance,
        rows=tuple(rows),
        min_balance=starting_balance if min_balance is None else min_balance,
        min_date=min_date,
    )
