"""Domain models - immutable dataclasses representing one engine run's snapshot"""

from dataclasses import dataclass, field
from datetime import date, timedelta
from enum import Enum
from typing import Optional, Tuple


class ObligationKind(str, Enum):
    """How much of an obligation's balance is due each month"""

    FIXED_FULL = "fixed_full"
    REVOLVING_MINIMUM = "revolving_minimum"


class TieBreak(str, Enum):
    """Ordering of same-day events"""

    EXPENSES_FIRST = "expenses_first"
    INCOME_FIRST = "income_first"


class EventKind(str, Enum):
    INCOME = "income"
    PER_PAY_OUTFLOW = "per_pay_outflow"
    OBLIGATION = "obligation"
    PLANNED = "planned"


@dataclass(frozen=True)
class IncomeStream:
    """Recurring pay on a fixed cadence, anchored on its last known occurrence"""

    id: str
    label: str
    cadence_days: int
    last_occurrence: Optional[date]
    amount: float
    per_pay_outflow: float = 0.0
    per_pay_outflow_label: str = "Car loan/lease (per pay)"


@dataclass(frozen=True)
class Obligation:
    """Monthly bill or revolving credit line"""

    id: str
    label: str
    kind: ObligationKind
    due_day: Optional[int]
    balance: float
    annual_rate_percent: float = 0.0
    credit_limit: float = 0.0

    @property
    def is_revolving(self) -> bool:
        return self.kind == ObligationKind.REVOLVING_MINIMUM

    @property
    def available_capacity(self) -> float:
        if not self.is_revolving:
            return 0.0
        return max(0.0, self.credit_limit - self.balance)


@dataclass(frozen=True)
class PlannedItem:
    """One-off dated amount; positive is spent, negative is received"""

    id: str
    label: str
    date: date
    amount: float


@dataclass(frozen=True)
class Profile:
    """Immutable snapshot of everything one decision run needs"""

    today: date
    starting_balance: float
    safety_floor: float = 0.0
    horizon_days: int = 90
    tie_break: TieBreak = TieBreak.EXPENSES_FIRST
    income_streams: Tuple[IncomeStream, ...] = ()
    obligations: Tuple[Obligation, ...] = ()
    planned_items: Tuple[PlannedItem, ...] = ()

    @property
    def horizon_end(self) -> date:
        return self.today + timedelta(days=max(0, self.horizon_days))

    @property
    def revolving_sources(self) -> Tuple[Obligation, ...]:
        return tuple(o for o in self.obligations if o.is_revolving)


@dataclass(frozen=True)
class Event:
    """Single dated cash movement"""

    date: date
    label: str
    inflow: float = 0.0
    outflow: float = 0.0
    kind: EventKind = EventKind.PLANNED
    source_id: Optional[str] = None

    @property
    def net(self) -> float:
        return self.inflow - self.outflow

    @property
    def is_inflow(self) -> bool:
        return self.kind == EventKind.INCOME or self.inflow > 0


@dataclass(frozen=True)
class ScheduleWarning:
    """Non-fatal problem found while expanding the profile"""

    code: str  # missing_anchor_date | non_positive_cadence | rate_missing | invalid_due_day
    message: str
    source_id: Optional[str] = None


@dataclass(frozen=True)
class LedgerRow:
    event: Event
    balance: float

    @property
    def date(self) -> date:
        return self.event.date


@dataclass(frozen=True)
class Ledger:
    """Ordered events annotated with the running balance after each one"""

    starting_balance: float
    rows: Tuple[LedgerRow, ...]
    min_balance: float
    min_date: Optional[date]

    @property
    def closing_balance(self) -> float:
        return self.rows[-1].balance if self.rows else self.starting_balance

    def prefix(self, until: date) -> Tuple[LedgerRow, ...]:
        """Rows dated on or before until"""
        return tuple(row for row in self.rows if row.date <= until)


@dataclass(frozen=True)
class Anchor:
    """Next due date of a bill, the boundary of its safety window"""

    id: str
    label: str
    date: date


@dataclass(frozen=True)
class AnchorVerdict:
    anchor: Anchor
    floor: float
    safe: bool
    min_balance: float
    min_date: Optional[date]
    breach: Optional[LedgerRow] = None

    @property
    def shortfall(self) -> float:
        if self.breach is None:
            return 0.0
        return self.floor - self.breach.balance


@dataclass(frozen=True)
class FundingDraw:
    """Portion of a recommendation drawn from one revolving source"""

    source_id: str
    label: str
    rate_percent: float
    amount: float
    interest: float


@dataclass(frozen=True)
class FundingRecommendation:
    shortfall: float
    borrow_amount: float
    primary: Optional[FundingDraw]
    draws: Tuple[FundingDraw, ...]
    days: int
    estimated_interest: float
    unfunded_remainder: float = 0.0
    advisory: Optional[str] = None
    notes: Tuple[str, ...] = ()

    @property
    def funded(self) -> bool:
        return self.borrow_amount > 0


@dataclass(frozen=True)
class AnchorDecision:
    verdict: AnchorVerdict
    recommendation: Optional[FundingRecommendation] = None


@dataclass(frozen=True)
class PayPeriodSummary:
    """Cumulative cash position up to and including a pay date"""

    pay_date: date
    inflow: float
    outflow: float
    surplus: float


@dataclass(frozen=True)
class DecisionReport:
    """Output of one full pipeline run"""

    events: Tuple[Event, ...]
    warnings: Tuple[ScheduleWarning, ...]
    ledger: Ledger
    decisions: Tuple[AnchorDecision, ...]
    next_bill: Optional[LedgerRow] = None
    pay_periods: Tuple[PayPeriodSummary, ...] = field(default_factory=tuple)

    @property
    def safe(self) -> bool:
        return all(d.verdict.safe for d in self.decisions)

    @property
    def recommendations(self) -> Tuple[FundingRecommendation, ...]:
        return tuple(d.recommendation for d in self.decisions if d.recommendation is not None)
