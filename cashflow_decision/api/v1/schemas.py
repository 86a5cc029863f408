"""Pydantic schemas for API request/response validation"""

from datetime import date
from typing import List, Optional

from pydantic import BaseModel, Field

from cashflow_decision.config import settings
from cashflow_decision.domain.models import ObligationKind, TieBreak


class IncomeStreamSchema(BaseModel):
    """Recurring pay stream"""

    id: str = Field(..., min_length=1)
    label: str = "Pay"
    cadence_days: int = Field(14, description="Days between pay dates; non-positive values produce a warning")
    last_occurrence: Optional[date] = Field(None, description="Most recent pay date")
    amount: float = Field(0.0, ge=0)
    per_pay_outflow: float = Field(0.0, ge=0, description="Deduction taken on every pay date")
    per_pay_outflow_label: str = "Car loan/lease (per pay)"


class ObligationSchema(BaseModel):
    """Monthly bill or revolving credit line"""

    id: str = Field(..., min_length=1)
    label: str = "Card"
    kind: ObligationKind = ObligationKind.FIXED_FULL
    due_day: Optional[int] = Field(None, description="Day of month; out-of-range values produce a warning")
    balance: float = Field(0.0, ge=0)
    annual_rate_percent: float = Field(0.0, ge=0)
    credit_limit: float = Field(0.0, ge=0)


class PlannedItemSchema(BaseModel):
    """One-off amount; positive is spent, negative is received"""

    id: str = Field(..., min_length=1)
    label: str = "Expense"
    date: date
    amount: float


class AnchorSchema(BaseModel):
    id: str = Field(..., min_length=1)
    label: str
    date: date


class ProfileRequest(BaseModel):
    """Request body for POST /v1/decision and POST /v1/schedule"""

    today: Optional[date] = Field(None, description="Evaluation date (defaults to the server date)")
    starting_balance: float = 0.0
    safety_floor: float = settings.default_safety_floor
    horizon_days: int = Field(settings.default_horizon_days, ge=0, le=settings.max_horizon_days)
    tie_break: TieBreak = TieBreak(settings.default_tie_break)
    income_streams: List[IncomeStreamSchema] = Field(default_factory=list)
    obligations: List[ObligationSchema] = Field(default_factory=list)
    planned_items: List[PlannedItemSchema] = Field(default_factory=list)
    anchors: Optional[List[AnchorSchema]] = Field(
        None, description="Bills to judge; defaults to the next due date of every obligation"
    )


class EventSchema(BaseModel):
    date: date
    label: str
    inflow: float
    outflow: float
    kind: str
    source_id: Optional[str] = None


class LedgerRowSchema(EventSchema):
    balance: float


class WarningSchema(BaseModel):
    code: str
    message: str
    source_id: Optional[str] = None


class ScheduleResponse(BaseModel):
    """Response for POST /v1/schedule"""

    events: List[EventSchema]
    warnings: List[WarningSchema]


class FundingDrawSchema(BaseModel):
    source_id: str
    label: str
    rate_percent: float
    amount: float
    interest: float


class FundingSchema(BaseModel):
    shortfall: float
    borrow_amount: float
    primary: Optional[FundingDrawSchema] = None
    draws: List[FundingDrawSchema]
    days: int
    estimated_interest: float
    unfunded_remainder: float
    advisory: Optional[str] = None
    notes: List[str]


class VerdictSchema(BaseModel):
    anchor: AnchorSchema
    safe: bool
    min_balance: float
    min_date: Optional[date] = None
    breach: Optional[LedgerRowSchema] = None
    shortfall: float
    funding: Optional[FundingSchema] = None


class PayPeriodSchema(BaseModel):
    pay_date: date
    inflow: float
    outflow: float
    surplus: float


class DecisionResponse(BaseModel):
    """Response for POST /v1/decision"""

    safe: bool
    today: date
    starting_balance: float
    min_balance: float
    min_date: Optional[date] = None
    next_bill: Optional[LedgerRowSchema] = None
    verdicts: List[VerdictSchema]
    pay_periods: List[PayPeriodSchema]
    ledger: List[LedgerRowSchema]
    warnings: List[WarningSchema]
