import logging
from typing import Annotated, List

from fastapi import APIRouter, HTTPException, Query

from amortizer.errors import AmortizationError
from amortizer.schemas.amortization import AmortizationRequest, PaymentRecordResponse
from amortizer.services.amortization import amortize

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/", response_model=List[PaymentRecordResponse])
def amortization_schedule(request: Annotated[AmortizationRequest, Query()]):
    try:
        schedule = amortize(request.loan_amount, request.terms_in_months, request.annual_interest_rate)
    except AmortizationError as e:
        logger.info("Rejected amortization request %s: %s", request.model_dump(), e)
        raise HTTPException(status_code=400, detail=str(e))
    return [record.to_dict() for record in schedule]
