"""Dependency injection for FastAPI endpoints"""

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from installment_tracker.domain.gateway import PersistenceGateway
from installment_tracker.domain.store import PlanStore
from installment_tracker.infrastructure.database.repositories import SnapshotRepository
from installment_tracker.infrastructure.database.session import get_db


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_gateway(db: Session = Depends(get_db)) -> PersistenceGateway:
    """Provide the snapshot gateway bound to this request's session"""
    return SnapshotRepository(db)


def get_store(gateway: PersistenceGateway = Depends(get_gateway)) -> PlanStore:
    """Load the current plan collection"""
    return PlanStore.from_snapshot(gateway.load())
