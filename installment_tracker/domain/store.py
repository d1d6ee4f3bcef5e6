"""In-memory plan collection with copy-on-write mutators"""

import logging
from dataclasses import replace
from datetime import date
from decimal import Decimal
from typing import Any, Dict, Iterator, List, Literal, Optional, Sequence, Tuple

from installment_tracker.domain.exceptions import (
    IndexOutOfRange,
    InvalidScheduleParameters,
    NotFoundError,
    ValidationError,
)
from installment_tracker.domain.installments import MAX_AMOUNT, MINOR_UNIT, generate_schedule, to_decimal
from installment_tracker.domain.models import Due, Plan
from installment_tracker.domain.snapshot import export_snapshot, parse_snapshot

logger = logging.getLogger(__name__)

Direction = Literal["up", "down"]


def _validate_terms(name: str, starting_month: date, duration_months: int, total_amount: Any) -> Decimal:
    """Check user-supplied plan terms, returning the amount as Decimal"""
    if not isinstance(name, str) or not name.strip():
        raise ValidationError("Plan name must not be empty")
    if not isinstance(starting_month, date):
        raise ValidationError(f"Starting month must be a date, got {starting_month!r}")
    if isinstance(duration_months, bool) or not isinstance(duration_months, int) or duration_months < 1:
        raise ValidationError(f"Duration must be a positive whole number of months, got {duration_months!r}")
    try:
        amount = to_decimal(total_amount)
    except InvalidScheduleParameters as e:
        raise ValidationError(str(e)) from e
    if amount <= 0:
        raise ValidationError(f"Total amount must be positive, got {total_amount!r}")
    if amount > MAX_AMOUNT:
        raise ValidationError(f"Total amount must not exceed {MAX_AMOUNT}, got {total_amount!r}")
    if amount != amount.quantize(MINOR_UNIT):
        raise ValidationError(f"Total amount must have at most 2 decimal places, got {total_amount!r}")
    return amount


class PlanStore:
    """
    Ordered collection of installment plans.

    The collection is an immutable tuple that every mutator replaces in a single
    assignment, after all validation has passed. Readers holding a previous
    `plans` tuple never observe a half-applied change.

    Persistence is the caller's job: load a snapshot with `from_snapshot`, call
    mutators, then hand `plans` to a gateway's `save`.
    """

    def __init__(self, plans: Sequence[Plan] = ()):
        self._plans: Tuple[Plan, ...] = tuple(plans)

    @classmethod
    def from_snapshot(cls, snapshot: Optional[Any]) -> "PlanStore":
        """Build a store from gateway output; None means nothing was saved yet"""
        store = cls()
        if snapshot is not None:
            store.replace_all(snapshot)
        return store

    @property
    def plans(self) -> Tuple[Plan, ...]:
        return self._plans

    def __len__(self) -> int:
        return len(self._plans)

    def __iter__(self) -> Iterator[Plan]:
        return iter(self._plans)

    def _index_of(self, plan_id: int) -> int:
        for index, plan in enumerate(self._plans):
            if plan.id == plan_id:
                return index
        raise NotFoundError(f"Plan {plan_id} not found")

    def get_plan(self, plan_id: int) -> Plan:
        return self._plans[self._index_of(plan_id)]

    def next_id(self) -> int:
        return max((plan.id for plan in self._plans), default=0) + 1

    def add_plan(self, name: str, starting_month: date, duration_months: int, total_amount: Any) -> int:
        """
        Create a plan with a freshly generated schedule and append it.

        Returns:
            The new plan's id

        Raises:
            ValidationError: Empty name, non-positive duration, or an amount that is
                non-positive, above MAX_AMOUNT or finer than the minor unit
        """
        amount = _validate_terms(name, starting_month, duration_months, total_amount)
        plan = Plan(
            id=self.next_id(),
            name=name,
            starting_month=starting_month,
            duration_months=duration_months,
            total_amount=amount,
            dues=generate_schedule(starting_month, duration_months, amount),
        )
        self._plans = self._plans + (plan,)
        logger.debug("Added plan %s (%s months, total %s)", plan.id, duration_months, amount)
        return plan.id

    def update_plan(
        self, plan_id: int, name: str, starting_month: date, duration_months: int, total_amount: Any
    ) -> Plan:
        """
        Replace a plan's terms, keeping its id and position.

        All dues are regenerated and every paid flag is dropped: after a change of
        terms the old payments no longer line up with the new schedule.

        Raises:
            NotFoundError: No plan with this id
            ValidationError: Invalid new terms
        """
        index = self._index_of(plan_id)
        amount = _validate_terms(name, starting_month, duration_months, total_amount)
        updated = replace(
            self._plans[index],
            name=name,
            starting_month=starting_month,
            duration_months=duration_months,
            total_amount=amount,
            dues=generate_schedule(starting_month, duration_months, amount),
        )
        self._plans = self._plans[:index] + (updated,) + self._plans[index + 1 :]
        logger.debug("Updated plan %s, schedule regenerated", plan_id)
        return updated

    def remove_plan(self, plan_id: int) -> None:
        """Delete a plan and its dues; unknown ids are ignored"""
        self._plans = tuple(plan for plan in self._plans if plan.id != plan_id)

    def toggle_paid(self, plan_id: int, month_index: int) -> Due:
        """
        Flip the paid flag of one due.

        Returns:
            The replacement due

        Raises:
            NotFoundError: No plan with this id
            IndexOutOfRange: month_index outside [0, duration_months)
        """
        index = self._index_of(plan_id)
        plan = self._plans[index]
        if isinstance(month_index, bool) or not isinstance(month_index, int) or not 0 <= month_index < len(plan.dues):
            raise IndexOutOfRange(f"Plan {plan_id} has no due at index {month_index!r}")

        due = replace(plan.dues[month_index], paid=not plan.dues[month_index].paid)
        dues = plan.dues[:month_index] + (due,) + plan.dues[month_index + 1 :]
        self._plans = self._plans[:index] + (replace(plan, dues=dues),) + self._plans[index + 1 :]
        return due

    def reorder(self, plan_id: int, direction: Direction) -> None:
        """Swap a plan with its neighbour; moving past either end does nothing"""
        if direction not in ("up", "down"):
            raise ValidationError(f"Direction must be 'up' or 'down', got {direction!r}")

        index = self._index_of(plan_id)
        target = index - 1 if direction == "up" else index + 1
        if target < 0 or target >= len(self._plans):
            return

        plans = list(self._plans)
        plans[index], plans[target] = plans[target], plans[index]
        self._plans = tuple(plans)

    def replace_all(self, snapshot: Any) -> None:
        """
        Swap in an imported snapshot wholesale.

        Raises:
            InvalidSnapshot: Shape or invariant violation; current plans are kept
        """
        self._plans = parse_snapshot(snapshot)
        logger.debug("Replaced collection with %s plan(s)", len(self._plans))

    def export(self) -> List[Dict[str, Any]]:
        return export_snapshot(self._plans)
