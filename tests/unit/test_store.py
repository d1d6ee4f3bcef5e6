"""Unit tests for the plan store mutators"""

import pytest
from datetime import date
from decimal import Decimal
from installment_tracker.domain.exceptions import IndexOutOfRange, InvalidSnapshot, NotFoundError, ValidationError
from installment_tracker.domain.store import PlanStore


def names(store: PlanStore) -> list[str]:
    return [plan.name for plan in store]


def test_add_plan_generates_schedule():
    """Test new plan arrives fully formed with consecutive unpaid dues"""
    store = PlanStore()
    plan_id = store.add_plan("Laptop", date(2024, 1, 1), 3, 300)

    plan = store.get_plan(plan_id)
    assert plan_id == 1
    assert plan.total_amount == Decimal("300")
    assert [(d.month, d.amount, d.paid) for d in plan.dues] == [
        (date(2024, 1, 1), Decimal("100"), False),
        (date(2024, 2, 1), Decimal("100"), False),
        (date(2024, 3, 1), Decimal("100"), False),
    ]


def test_add_plan_appends_with_next_id(store: PlanStore):
    plan_id = store.add_plan("TV", date(2024, 6, 1), 2, 500)

    assert plan_id == 4
    assert names(store)[-1] == "TV"


def test_ids_not_reused_after_removing_earlier_plan(store: PlanStore):
    """Test id allocation is max + 1, so removing a middle plan leaves a gap"""
    store.remove_plan(2)
    assert store.add_plan("TV", date(2024, 6, 1), 2, 500) == 4


def test_ids_restart_when_store_emptied():
    store = PlanStore()
    store.add_plan("Laptop", date(2024, 1, 1), 3, 300)
    store.remove_plan(1)

    assert store.add_plan("Phone", date(2024, 1, 1), 3, 300) == 1


@pytest.mark.parametrize(
    "name, starting_month, duration, amount",
    [
        ("", date(2024, 1, 1), 3, 300),
        ("   ", date(2024, 1, 1), 3, 300),
        ("Laptop", date(2024, 1, 1), 0, 300),
        ("Laptop", date(2024, 1, 1), 2.5, 300),
        ("Laptop", date(2024, 1, 1), True, 300),
        ("Laptop", date(2024, 1, 1), 3, 0),
        ("Laptop", date(2024, 1, 1), 3, -50),
        ("Laptop", date(2024, 1, 1), 3, float("inf")),
        ("Laptop", date(2024, 1, 1), 3, "300"),
        ("Laptop", "2024-01-01", 3, 300),
    ],
)
def test_add_plan_validation(store: PlanStore, name, starting_month, duration, amount):
    """Test invalid input raises and leaves the collection untouched"""
    before = store.plans

    with pytest.raises(ValidationError):
        store.add_plan(name, starting_month, duration, amount)

    assert store.plans is before


def test_update_plan_regenerates_and_discards_paid(store: PlanStore):
    """Test shrinking duration 3 → 2 drops the paid history"""
    store.toggle_paid(1, 0)

    updated = store.update_plan(1, "Laptop Pro", date(2024, 1, 1), 2, 300)

    assert updated.id == 1
    assert updated.name == "Laptop Pro"
    assert len(updated.dues) == 2
    assert all(not d.paid for d in updated.dues)
    assert [d.amount for d in updated.dues] == [Decimal("150"), Decimal("150")]
    assert names(store) == ["Laptop Pro", "Phone", "Sofa"]


def test_update_plan_not_found(store: PlanStore):
    with pytest.raises(NotFoundError):
        store.update_plan(99, "Ghost", date(2024, 1, 1), 2, 100)


def test_update_plan_validation_keeps_plan(store: PlanStore):
    before = store.get_plan(1)

    with pytest.raises(ValidationError):
        store.update_plan(1, "Laptop", date(2024, 1, 1), -1, 300)

    assert store.get_plan(1) is before


def test_remove_plan(store: PlanStore):
    store.remove_plan(2)

    assert names(store) == ["Laptop", "Sofa"]
    with pytest.raises(NotFoundError):
        store.get_plan(2)


def test_remove_plan_absent_id_is_noop(store: PlanStore):
    before = store.plans

    store.remove_plan(42)

    assert store.plans == before


def test_toggle_paid_twice_restores_flag(store: PlanStore):
    """Test toggle is its own inverse"""
    first = store.toggle_paid(2, 3)
    second = store.toggle_paid(2, 3)

    assert first.paid is True
    assert second.paid is False
    assert store.get_plan(2).dues[3].paid is False


def test_toggle_paid_touches_only_one_due(store: PlanStore):
    other_plans = (store.get_plan(1), store.get_plan(3))

    store.toggle_paid(2, 1)

    dues = store.get_plan(2).dues
    assert [d.paid for d in dues] == [False, True, False, False, False, False]
    assert (store.get_plan(1), store.get_plan(3)) == other_plans


def test_toggle_paid_does_not_mutate_previous_snapshot(store: PlanStore):
    snapshot = store.plans

    store.toggle_paid(1, 0)

    assert snapshot[0].dues[0].paid is False
    assert store.plans[0].dues[0].paid is True


@pytest.mark.parametrize("index", [-1, 3, 100])
def test_toggle_paid_index_out_of_range(store: PlanStore, index: int):
    with pytest.raises(IndexOutOfRange):
        store.toggle_paid(1, index)


def test_toggle_paid_not_found(store: PlanStore):
    with pytest.raises(NotFoundError):
        store.toggle_paid(99, 0)


def test_reorder_swaps_neighbours(store: PlanStore):
    store.reorder(2, "up")
    assert names(store) == ["Phone", "Laptop", "Sofa"]

    store.reorder(2, "down")
    assert names(store) == ["Laptop", "Phone", "Sofa"]

    store.reorder(1, "down")
    assert names(store) == ["Phone", "Laptop", "Sofa"]


def test_reorder_at_boundaries_is_noop(store: PlanStore):
    before = store.plans

    store.reorder(1, "up")
    store.reorder(3, "down")

    assert store.plans == before


def test_reorder_invalid_direction(store: PlanStore):
    with pytest.raises(ValidationError):
        store.reorder(1, "left")


def test_reorder_not_found(store: PlanStore):
    with pytest.raises(NotFoundError):
        store.reorder(99, "up")


def test_replace_all_round_trip(store: PlanStore):
    """Test importing an export reproduces the same collection"""
    store.toggle_paid(1, 0)
    store.toggle_paid(3, 2)
    store.reorder(3, "up")

    restored = PlanStore()
    restored.replace_all(store.export())

    assert restored.plans == store.plans


def test_replace_all_rejects_and_keeps_previous(store: PlanStore):
    before = store.plans
    snapshot = store.export()
    snapshot[1]["months"].pop()

    with pytest.raises(InvalidSnapshot):
        store.replace_all(snapshot)

    assert store.plans is before


def test_from_snapshot_none_gives_empty_store():
    assert len(PlanStore.from_snapshot(None)) == 0


def test_add_plan_at_amount_limit_round_trips():
    """Test the largest accepted amount survives export and re-import exactly"""
    store = PlanStore()
    store.add_plan("House", date(2024, 1, 1), 7, Decimal("999999999999.99"))

    restored = PlanStore()
    restored.replace_all(store.export())

    assert restored.plans == store.plans
    assert restored.get_plan(1).total_amount == Decimal("999999999999.99")


@pytest.mark.parametrize(
    "amount",
    [
        Decimal("1000000000000.00"),
        Decimal("1e27"),
        1e17,
        Decimal("100.12345678901234567"),
        Decimal("100.001"),
    ],
)
def test_add_plan_rejects_oversized_or_too_precise_amount(amount):
    store = PlanStore()

    with pytest.raises(ValidationError):
        store.add_plan("House", date(2024, 1, 1), 2, amount)

    assert len(store) == 0


def test_update_plan_rejects_oversized_amount(store: PlanStore):
    before = store.get_plan(1)

    with pytest.raises(ValidationError):
        store.update_plan(1, "Laptop", date(2024, 1, 1), 3, Decimal("1e27"))

    assert store.get_plan(1) is before


def test_add_plan_accepts_trailing_zero_decimals():
    store = PlanStore()
    plan_id = store.add_plan("Laptop", date(2024, 1, 1), 3, Decimal("300.000"))

    assert store.get_plan(plan_id).total_amount == 300
