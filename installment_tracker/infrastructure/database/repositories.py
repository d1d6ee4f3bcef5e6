"""Data access layer for plan snapshots"""

from typing import Any, List, Optional, Sequence
from sqlalchemy.orm import Session
from installment_tracker.config import settings
from installment_tracker.domain.models import Plan
from installment_tracker.domain.snapshot import export_snapshot
from installment_tracker.infrastructure.database.models import PlanSnapshot


class SnapshotRepository:
    """PersistenceGateway backed by a single JSON row"""

    def __init__(self, db: Session, key: str | None = None):
        self.db = db
        self.key = key or settings.snapshot_key

    def load(self) -> Optional[List[Any]]:
        """Fetch the stored snapshot, None if this key was never saved"""
        row = self.db.get(PlanSnapshot, self.key)
        return row.payload if row else None

    def save(self, plans: Sequence[Plan]) -> None:
        """Upsert the snapshot row; the caller commits"""
        payload = export_snapshot(plans)
        row = self.db.get(PlanSnapshot, self.key)
        if row is None:
            self.db.add(PlanSnapshot(key=self.key, payload=payload))
        else:
            row.payload = payload
        self.db.flush()
