"""/v1/snapshot - export and import the whole plan collection"""

import logging
from typing import Any, Dict, List
from fastapi import APIRouter, Body, Depends, Request
from sqlalchemy.orm import Session

from installment_tracker.api.dependencies import get_gateway, get_request_id, get_store
from installment_tracker.api.v1.persistence import save_plans
from installment_tracker.domain.exceptions import InvalidSnapshot
from installment_tracker.domain.gateway import PersistenceGateway
from installment_tracker.domain.store import PlanStore
from installment_tracker.infrastructure.database.session import get_db
from installment_tracker.infrastructure.observability.logging import log_plan_event
from installment_tracker.infrastructure.observability.metrics import record_operation, snapshot_import_failures_counter

router = APIRouter()


@router.get("/snapshot")
def export_plans(store: PlanStore = Depends(get_store)) -> List[Dict[str, Any]]:
    """Full collection in the portable snapshot format"""
    return store.export()


@router.put("/snapshot")
def import_plans(
    request: Request,
    payload: Any = Body(...),
    store: PlanStore = Depends(get_store),
    gateway: PersistenceGateway = Depends(get_gateway),
    db: Session = Depends(get_db),
) -> List[Dict[str, Any]]:
    """
    Replace every plan with an imported snapshot.

    A snapshot that fails validation is rejected as a whole and the stored
    plans stay as they were.
    """
    request_id = get_request_id(request)
    try:
        store.replace_all(payload)
    except InvalidSnapshot as e:
        snapshot_import_failures_counter.inc()
        logging.warning(f"Snapshot rejected: {e}", extra={"request_id": request_id})
        raise

    save_plans(store, gateway, db, request_id)

    record_operation("import")
    log_plan_event(request_id, "snapshot_imported", plan_count=len(store))
    return store.export()
