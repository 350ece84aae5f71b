"""Heat-pump subsidy (BEG EM) endpoint."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, status

from app.core.messages import validation_message
from app.schemas.subsidy import FundingRequest, FundingResponse
from engine.subsidy import FundingValidationError, compute_subsidy

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/heat-pump",
    response_model=FundingResponse,
    summary="Heat-pump funding",
    description="Compute the eligible BEG EM funding with efficiency, climate-speed "
    "and income bonuses, including the common/personal split for shared buildings.",
)
async def heat_pump_funding(body: FundingRequest):
    try:
        result = compute_subsidy(body.to_engine())
    except FundingValidationError as exc:
        logger.info(
            "Rejected funding request: %s",
            exc.reason.value,
            extra={"calculation": "subsidy", "reason": exc.reason.value},
        )
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={
                "code": exc.reason.value,
                "message": validation_message(exc.reason, exc.params),
                "params": exc.params,
            },
        )

    return FundingResponse.from_result(result)
