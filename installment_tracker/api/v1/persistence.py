"""Save-and-commit step shared by every mutating endpoint"""

import logging
from fastapi import HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from installment_tracker.domain.gateway import PersistenceGateway
from installment_tracker.domain.store import PlanStore


def save_plans(store: PlanStore, gateway: PersistenceGateway, db: Session, request_id: str) -> None:
    """Write the store's collection through the gateway and commit"""
    try:
        gateway.save(store.plans)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logging.error(f"Failed to save plans: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=503, detail="Plan storage unavailable")
