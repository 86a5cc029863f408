"""POST /v1/decision - cash-flow safety decision endpoint"""

import time
import logging
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Request

from cashflow_decision.api.v1.converters import decision_response, to_anchors, to_profile
from cashflow_decision.api.v1.schemas import DecisionResponse, ProfileRequest
from cashflow_decision.api.dependencies import get_request_id, get_today
from cashflow_decision.domain.decision import evaluate
from cashflow_decision.domain.exceptions import InvalidProfileError
from cashflow_decision.infrastructure.observability.metrics import record_decision
from cashflow_decision.infrastructure.observability.logging import log_decision

router = APIRouter()


@router.post("/decision", response_model=DecisionResponse)
def create_decision(
    request_body: ProfileRequest,
    request: Request,
    today: date = Depends(get_today),
):
    """
    Decide whether projected cash stays above the floor before each bill.

    Flow:
    1. Convert the request into an immutable profile snapshot
    2. Schedule events, simulate the ledger, judge each anchor
    3. Recommend borrowing for every unsafe anchor
    4. Record metrics and logs
    5. Return the decision with amounts rounded to cents
    """
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        profile = to_profile(request_body, today)
        report = evaluate(profile, to_anchors(request_body))

        duration_ms = (time.time() - start_time) * 1000
        record_decision(report)
        log_decision(request_id, report, duration_ms)

        return decision_response(profile, report)

    except InvalidProfileError as e:
        logging.warning(f"Invalid profile: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")
