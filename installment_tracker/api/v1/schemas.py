"""Pydantic schemas for API request/response validation"""

from datetime import date
from decimal import Decimal
from typing import Annotated, List, Literal
from pydantic import BaseModel, Field, PlainSerializer

from installment_tracker.domain import aggregates
from installment_tracker.domain.installments import MAX_AMOUNT
from installment_tracker.domain.models import Plan

# Decimals go out as JSON numbers, not strings
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class PlanTermsRequest(BaseModel):
    """Request body for POST /v1/plans and PUT /v1/plans/{plan_id}"""

    name: str = Field(..., min_length=1, description="Plan name")
    starting_date: date = Field(..., description="Month of the first due")
    duration_months: int = Field(..., gt=0, description="Number of monthly dues")
    total_amount: Decimal = Field(
        ..., gt=0, le=MAX_AMOUNT, decimal_places=2, allow_inf_nan=False, description="Amount split across the dues"
    )


class MoveRequest(BaseModel):
    """Request body for POST /v1/plans/{plan_id}/move"""

    direction: Literal["up", "down"]


class DueSchema(BaseModel):
    """Single monthly due"""

    index: int
    month: date
    amount: Money
    paid: bool


class PlanResponse(BaseModel):
    """Plan with its schedule and progress"""

    id: int
    name: str
    starting_date: date
    duration_months: int
    total_amount: Money
    monthly_amount: Money
    percentage_paid: Money
    dues: List[DueSchema]

    @classmethod
    def from_plan(cls, plan: Plan) -> "PlanResponse":
        return cls(
            id=plan.id,
            name=plan.name,
            starting_date=plan.starting_month,
            duration_months=plan.duration_months,
            total_amount=plan.total_amount,
            monthly_amount=plan.monthly_amount.quantize(Decimal("0.01")),
            percentage_paid=aggregates.percentage_paid(plan).quantize(Decimal("0.01")),
            dues=[
                DueSchema(index=i, month=due.month, amount=due.amount, paid=due.paid)
                for i, due in enumerate(plan.dues)
            ],
        )


class SummaryResponse(BaseModel):
    """Response for GET /v1/summary"""

    today: date
    due_this_month: Money
    due_next_month: Money
    total_amount: Money
    currency: str
