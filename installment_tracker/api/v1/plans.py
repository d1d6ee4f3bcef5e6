"""/v1/plans - create, edit, delete, reorder plans and mark dues paid"""

from typing import List
from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.orm import Session

from installment_tracker.api.dependencies import get_gateway, get_request_id, get_store
from installment_tracker.api.v1.persistence import save_plans
from installment_tracker.api.v1.schemas import DueSchema, MoveRequest, PlanResponse, PlanTermsRequest
from installment_tracker.domain.gateway import PersistenceGateway
from installment_tracker.domain.store import PlanStore
from installment_tracker.infrastructure.database.session import get_db
from installment_tracker.infrastructure.observability.logging import log_plan_event
from installment_tracker.infrastructure.observability.metrics import record_operation, record_toggle

router = APIRouter()


@router.get("/plans", response_model=List[PlanResponse])
def list_plans(store: PlanStore = Depends(get_store)):
    """All plans in display order"""
    return [PlanResponse.from_plan(plan) for plan in store]


@router.post("/plans", response_model=PlanResponse, status_code=status.HTTP_201_CREATED)
def create_plan(
    body: PlanTermsRequest,
    request: Request,
    store: PlanStore = Depends(get_store),
    gateway: PersistenceGateway = Depends(get_gateway),
    db: Session = Depends(get_db),
):
    """
    Add a plan at the end of the list.

    Dues are generated immediately: one per month from starting_date,
    all unpaid, with the last one absorbing any rounding remainder.
    """
    request_id = get_request_id(request)
    plan_id = store.add_plan(body.name, body.starting_date, body.duration_months, body.total_amount)
    save_plans(store, gateway, db, request_id)

    record_operation("add")
    log_plan_event(request_id, "plan_added", plan_id, duration_months=body.duration_months)
    return PlanResponse.from_plan(store.get_plan(plan_id))


@router.get("/plans/{plan_id}", response_model=PlanResponse)
def get_plan(plan_id: int, store: PlanStore = Depends(get_store)):
    return PlanResponse.from_plan(store.get_plan(plan_id))


@router.put("/plans/{plan_id}", response_model=PlanResponse)
def update_plan(
    plan_id: int,
    body: PlanTermsRequest,
    request: Request,
    store: PlanStore = Depends(get_store),
    gateway: PersistenceGateway = Depends(get_gateway),
    db: Session = Depends(get_db),
):
    """
    Change a plan's terms.

    The whole schedule is regenerated, so every due comes back unpaid.
    """
    request_id = get_request_id(request)
    plan = store.update_plan(plan_id, body.name, body.starting_date, body.duration_months, body.total_amount)
    save_plans(store, gateway, db, request_id)

    record_operation("update")
    log_plan_event(request_id, "plan_updated", plan_id, duration_months=plan.duration_months)
    return PlanResponse.from_plan(plan)


@router.delete("/plans/{plan_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_plan(
    plan_id: int,
    request: Request,
    store: PlanStore = Depends(get_store),
    gateway: PersistenceGateway = Depends(get_gateway),
    db: Session = Depends(get_db),
):
    """Remove a plan; deleting an unknown id still succeeds"""
    request_id = get_request_id(request)
    store.remove_plan(plan_id)
    save_plans(store, gateway, db, request_id)

    record_operation("remove")
    log_plan_event(request_id, "plan_removed", plan_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/plans/{plan_id}/dues/{month_index}/toggle", response_model=DueSchema)
def toggle_due(
    plan_id: int,
    month_index: int,
    request: Request,
    store: PlanStore = Depends(get_store),
    gateway: PersistenceGateway = Depends(get_gateway),
    db: Session = Depends(get_db),
):
    """Flip one due between paid and unpaid"""
    request_id = get_request_id(request)
    due = store.toggle_paid(plan_id, month_index)
    save_plans(store, gateway, db, request_id)

    record_toggle(due.paid)
    log_plan_event(request_id, "due_toggled", plan_id, month_index=month_index, paid=due.paid)
    return DueSchema(index=month_index, month=due.month, amount=due.amount, paid=due.paid)


@router.post("/plans/{plan_id}/move", response_model=List[PlanResponse])
def move_plan(
    plan_id: int,
    body: MoveRequest,
    request: Request,
    store: PlanStore = Depends(get_store),
    gateway: PersistenceGateway = Depends(get_gateway),
    db: Session = Depends(get_db),
):
    """Swap a plan with its neighbour and return the new order"""
    request_id = get_request_id(request)
    store.reorder(plan_id, body.direction)
    save_plans(store, gateway, db, request_id)

    record_operation("reorder")
    log_plan_event(request_id, "plan_moved", plan_id, direction=body.direction)
    return [PlanResponse.from_plan(plan) for plan in store]
