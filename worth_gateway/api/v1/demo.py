"""GET /v1/demo/accounts/{account_id}/history - raw synthetic balance history"""

from datetime import date
from fastapi import APIRouter, Depends, Query

from worth_gateway.api.dependencies import get_today
from worth_gateway.api.v1.schemas import SyntheticHistoryResponse
from worth_gateway.domain.exceptions import ValidationError
from worth_gateway.domain.models import AccountCategory
from worth_gateway.domain.synthetic import INT64_MAX, INT64_MIN, generate_history
from worth_gateway.infrastructure.observability.metrics import synthetic_history_counter

router = APIRouter()


@router.get("/demo/accounts/{account_id}/history", response_model=SyntheticHistoryResponse)
def get_synthetic_history(
    account_id: int,
    category: str = Query(..., description="Account category tag, e.g. savings"),
    target_minor: int = Query(
        ..., ge=INT64_MIN, le=INT64_MAX, description="Balance on the last day, in minor units"
    ),
    sign: int = Query(1, description="Normal balance sign, 1 or -1"),
    today: date = Depends(get_today),
):
    """
    Generate the demo history for an account without touching storage.

    Identical parameters always produce the identical series.
    """
    if sign not in (1, -1):
        raise ValidationError(f"Normal balance sign must be 1 or -1, got {sign}")

    parsed = AccountCategory.parse(category)
    history = generate_history(account_id, parsed, target_minor, sign, today)
    synthetic_history_counter.labels(category=parsed.value).inc()

    return SyntheticHistoryResponse(
        account_id=account_id,
        category=parsed,
        start_date=history.start_date,
        end_date=history.end_date,
        values=history.values,
    )
