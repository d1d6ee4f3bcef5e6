"""Snapshot import/export boundary.

A snapshot is the full serialized collection, as written by the original
tracker's "Export Data" button and stored under a single key:

    [{"id": 1, "name": "Laptop", "startingDate": "2024-01-01", "duration": 3,
      "totalAmount": 300, "months": [{"month": "2024-01-01", "amount": 100, "paid": false}, ...]}]

Records are validated with pydantic for shape, then checked against the plan
invariants before anything is handed to the store.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Annotated, Any, Dict, List, Sequence, Tuple

import pydantic
from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, StrictBool, StrictInt, StrictStr, TypeAdapter

from installment_tracker.domain.exceptions import InvalidSnapshot
from installment_tracker.domain.installments import MAX_AMOUNT
from installment_tracker.domain.models import Due, Plan
from installment_tracker.utils.date_utils import month_key

TOLERANCE = Decimal("0.01")


def _parse_date(value: Any) -> Any:
    # Browser exports carry full timestamps ("2024-01-15T00:00:00.000Z")
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        if "T" in value:
            return datetime.fromisoformat(value.replace("Z", "+00:00")).date()
        return value
    raise ValueError("expected an ISO-8601 date string")


def _parse_amount(value: Any) -> Any:
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        raise ValueError("expected a number")
    if isinstance(value, float):
        return Decimal(repr(value))
    return value


IsoDate = Annotated[date, BeforeValidator(_parse_date)]
Amount = Annotated[Decimal, BeforeValidator(_parse_amount)]


class DueRecord(BaseModel):
    """One entry of a plan's "months" array"""

    model_config = ConfigDict(extra="forbid")

    month: IsoDate
    amount: Amount = Field(ge=0)
    paid: StrictBool


class PlanRecord(BaseModel):
    """Serialized plan"""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    id: StrictInt
    name: StrictStr
    starting_date: IsoDate = Field(alias="startingDate")
    duration: StrictInt = Field(gt=0)
    total_amount: Amount = Field(alias="totalAmount", ge=0, le=MAX_AMOUNT)
    months: List[DueRecord]


_snapshot_adapter = TypeAdapter(List[PlanRecord])


def _check_invariants(record: PlanRecord) -> None:
    if len(record.months) != record.duration:
        raise InvalidSnapshot(
            f"Plan {record.id}: {len(record.months)} months recorded for a {record.duration}-month duration"
        )

    first = month_key(record.starting_date)
    for i, due in enumerate(record.months):
        if month_key(due.month) != first + i:
            raise InvalidSnapshot(f"Plan {record.id}: month {i} is {due.month.isoformat()}, schedule is not consecutive")

    amounts = [due.amount for due in record.months]
    if len(set(amounts[:-1])) > 1:
        raise InvalidSnapshot(f"Plan {record.id}: dues are not split equally")
    if abs(sum(amounts, Decimal(0)) - record.total_amount) > TOLERANCE:
        raise InvalidSnapshot(f"Plan {record.id}: dues sum to {sum(amounts)} but total is {record.total_amount}")


def parse_snapshot(raw: Any) -> Tuple[Plan, ...]:
    """
    Validate a snapshot and convert it to plans.

    Args:
        raw: Decoded JSON (list of plan dicts) or the JSON text itself

    Returns:
        Plans in snapshot order

    Raises:
        InvalidSnapshot: On any shape error, broken invariant or duplicate id
    """
    try:
        if isinstance(raw, (str, bytes)):
            records = _snapshot_adapter.validate_json(raw)
        else:
            records = _snapshot_adapter.validate_python(raw)
    except pydantic.ValidationError as e:
        raise InvalidSnapshot(f"Malformed snapshot: {e.error_count()} error(s): {e.errors()[0]['msg']}") from e

    seen = set()
    plans = []
    for record in records:
        if record.id in seen:
            raise InvalidSnapshot(f"Duplicate plan id {record.id}")
        seen.add(record.id)
        _check_invariants(record)

        plans.append(
            Plan(
                id=record.id,
                name=record.name,
                starting_month=record.starting_date,
                duration_months=record.duration,
                total_amount=record.total_amount,
                dues=tuple(Due(month=m.month, amount=m.amount, paid=m.paid) for m in record.months),
            )
        )

    return tuple(plans)


def export_snapshot(plans: Sequence[Plan]) -> List[Dict[str, Any]]:
    """Serialize plans to JSON-ready dicts (ISO dates, numeric amounts)"""
    return [
        {
            "id": plan.id,
            "name": plan.name,
            "startingDate": plan.starting_month.isoformat(),
            "duration": plan.duration_months,
            "totalAmount": float(plan.total_amount),
            "months": [
                {"month": due.month.isoformat(), "amount": float(due.amount), "paid": due.paid}
                for due in plan.dues
            ],
        }
        for plan in plans
    ]
