"""Report figures computed over a plan collection.

All functions are pure: they take a snapshot of plans (and, where time
matters, the caller's notion of today) and never read the clock themselves.
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Iterable
from installment_tracker.domain.models import Plan
from installment_tracker.utils.date_utils import add_months, same_month


@dataclass(frozen=True)
class Summary:
    """Totals shown under the plan list"""

    due_this_month: Decimal
    due_next_month: Decimal
    total_amount: Decimal


def amount_due_in_month(plans: Iterable[Plan], target: date) -> Decimal:
    """Sum of unpaid dues falling in target's calendar month"""
    return sum(
        (due.amount for plan in plans for due in plan.dues if not due.paid and same_month(due.month, target)),
        Decimal(0),
    )


def amount_due_this_month(plans: Iterable[Plan], today: date) -> Decimal:
    return amount_due_in_month(plans, today)


def amount_due_next_month(plans: Iterable[Plan], today: date) -> Decimal:
    return amount_due_in_month(plans, add_months(today, 1))


def percentage_paid(plan: Plan) -> Decimal:
    """
    Share of the plan total already paid, 0-100.

    A zero total yields exactly 0 rather than a division error.
    """
    if plan.total_amount == 0:
        return Decimal(0)
    return plan.paid_amount / plan.total_amount * 100


def total_across_all_plans(plans: Iterable[Plan]) -> Decimal:
    """Sum of every plan's total, paid or not"""
    return sum((plan.total_amount for plan in plans), Decimal(0))


def summarize(plans: Iterable[Plan], today: date) -> Summary:
    plans = tuple(plans)
    return Summary(
        due_this_month=amount_due_this_month(plans, today),
        due_next_month=amount_due_next_month(plans, today),
        total_amount=total_across_all_plans(plans),
    )
