"""POST /v1/schedule - expanded cash events for a profile"""

import logging
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Request

from cashflow_decision.api.v1.converters import event_schema, to_profile, warning_schema
from cashflow_decision.api.v1.schemas import ProfileRequest, ScheduleResponse
from cashflow_decision.api.dependencies import get_request_id, get_today
from cashflow_decision.domain.exceptions import InvalidProfileError
from cashflow_decision.domain.scheduler import schedule

router = APIRouter()


@router.post("/schedule", response_model=ScheduleResponse)
def create_schedule(
    request_body: ProfileRequest,
    request: Request,
    today: date = Depends(get_today),
):
    """
    Expand a profile into its sorted event list.

    Returns:
        Events within the horizon plus any scheduling warnings
    """
    try:
        profile = to_profile(request_body, today)
    except InvalidProfileError as e:
        logging.warning(f"Invalid profile: {e}", extra={"request_id": get_request_id(request)})
        raise HTTPException(status_code=422, detail=str(e))

    events, warnings = schedule(profile)
    return ScheduleResponse(
        events=[event_schema(e) for e in events],
        warnings=[warning_schema(w) for w in warnings],
    )
