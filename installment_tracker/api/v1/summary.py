"""GET /v1/summary - amounts due this month, next month and overall"""

from datetime import date
from fastapi import APIRouter, Depends, Query

from installment_tracker.api.dependencies import get_store
from installment_tracker.api.v1.schemas import SummaryResponse
from installment_tracker.config import settings
from installment_tracker.domain.aggregates import summarize
from installment_tracker.domain.store import PlanStore

router = APIRouter()


@router.get("/summary", response_model=SummaryResponse)
def get_summary(
    today: date | None = Query(None, description="Reference date, defaults to the server's current date"),
    store: PlanStore = Depends(get_store),
):
    """
    Report figures across all plans.

    Returns:
        Unpaid dues in today's month and the next one, plus the sum of all plan totals
    """
    today = today or date.today()
    summary = summarize(store.plans, today)

    return SummaryResponse(
        today=today,
        due_this_month=summary.due_this_month,
        due_next_month=summary.due_next_month,
        total_amount=summary.total_amount,
        currency=settings.currency,
    )
