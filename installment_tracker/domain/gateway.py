"""Persistence contract the store's callers depend on"""

from typing import Any, List, Optional, Protocol, Sequence
from installment_tracker.domain.models import Plan


class PersistenceGateway(Protocol):
    """Loads and saves the whole plan collection as one snapshot"""

    def load(self) -> Optional[List[Any]]:
        """Return the last saved snapshot, or None if nothing was ever saved"""
        ...

    def save(self, plans: Sequence[Plan]) -> None:
        """Persist the collection; called after every successful mutation"""
        ...
