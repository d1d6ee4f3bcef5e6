"""Monthly due schedule generation for installment plans"""

from datetime import date
from decimal import Decimal, InvalidOperation, ROUND_DOWN
from typing import Tuple
from installment_tracker.domain.exceptions import InvalidScheduleParameters
from installment_tracker.domain.models import Due
from installment_tracker.utils.date_utils import add_months

MINOR_UNIT = Decimal("0.01")
# 14 significant digits, so amounts survive a JSON float round trip unchanged
MAX_AMOUNT = Decimal("999999999999.99")


def to_decimal(value: Decimal | int | float) -> Decimal:
    """
    Convert a monetary input to Decimal.

    Floats go through str() so 0.1 becomes Decimal("0.1"), not its binary expansion.

    Raises:
        InvalidScheduleParameters: For bools, strings, NaN or infinities
    """
    if isinstance(value, bool) or not isinstance(value, (Decimal, int, float)):
        raise InvalidScheduleParameters(f"Amount must be a number, got {value!r}")
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value))
    except InvalidOperation as e:
        raise InvalidScheduleParameters(f"Amount is not representable: {value!r}") from e
    if not amount.is_finite():
        raise InvalidScheduleParameters(f"Amount must be finite, got {value!r}")
    return amount


def generate_schedule(
    starting_month: date,
    duration_months: int,
    total_amount: Decimal | int | float,
) -> Tuple[Due, ...]:
    """
    Split a total into equal consecutive monthly dues.

    Requirements:
    - Exactly duration_months dues, one per month starting at starting_month
    - Every due starts unpaid
    - Each due is total / duration rounded down to the minor unit
    - Last due absorbs rounding remainder so the dues sum to the total exactly

    Args:
        starting_month: Month of the first due (day kept, clamped in short months)
        duration_months: Number of monthly dues, at least 1
        total_amount: Amount to split

    Returns:
        Tuple of Due objects ordered by month

    Example:
        100.00 over 3 months → [33.33, 33.33, 33.34]
    """
    if not isinstance(starting_month, date):
        raise InvalidScheduleParameters(f"Starting month must be a date, got {starting_month!r}")
    if isinstance(duration_months, bool) or not isinstance(duration_months, int):
        raise InvalidScheduleParameters(f"Duration must be an integer, got {duration_months!r}")
    if duration_months <= 0:
        raise InvalidScheduleParameters(f"Duration must be at least 1 month, got {duration_months}")

    total = to_decimal(total_amount)
    try:
        base_amount = (total / duration_months).quantize(MINOR_UNIT, rounding=ROUND_DOWN)
    except InvalidOperation as e:
        raise InvalidScheduleParameters(f"Amount is not representable: {total_amount!r}") from e
    remainder = total - base_amount * duration_months

    dues = []
    for i in range(duration_months):
        amount = base_amount + (remainder if i == duration_months - 1 else 0)
        dues.append(Due(month=add_months(starting_month, i), amount=amount))

    return tuple(dues)
