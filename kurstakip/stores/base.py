from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Dict, Generic, List, Optional, TypeVar

from kurstakip.errors import InstitutionContextMissing
from kurstakip.stores.gateway import DocumentGateway

logger = logging.getLogger(__name__)

T = TypeVar("T")

PROTECTED_FIELDS = {"id", "institution_id", "created_at"}


@dataclass
class StoreContext:
    """Which institution a store currently serves."""
    institution_id: Optional[str] = None


class RecordStore(Generic[T]):
    """
    Live, institution-filtered copy of one collection.

    `items` is only ever replaced by a snapshot pushed from the gateway; mutations go to
    the database and come back through the subscription.
    """

    model = None
    schema = None

    def __init__(self, gateway: DocumentGateway, context: Optional[StoreContext] = None):
        self.gateway = gateway
        self.context = context or StoreContext()
        self.items: List[T] = []
        self.loading = False
        self.initialized = False
        self._unwatch: Optional[Callable[[], None]] = None
        self._listeners: List[Callable[[List[T]], None]] = []

    @property
    def institution_id(self) -> Optional[str]:
        return self.context.institution_id

    # --- lifecycle ---------------------------------------------------------

    def initialize(self, institution_id: str) -> None:
        if self.initialized and self.context.institution_id == institution_id:
            return
        if self.context.institution_id is not None and self.context.institution_id != institution_id:
            logger.info(
                "%s switching institution %s -> %s",
                type(self).__name__, self.context.institution_id, institution_id,
            )
            self.reset()

        self.context.institution_id = institution_id
        self.loading = True
        self._unwatch = self.gateway.watch(self.model, self.schema, self.filters(), self._on_snapshot)

    def filters(self) -> Dict[str, Any]:
        return {"institution_id": self.context.institution_id}

    def reset(self) -> None:
        if self._unwatch:
            self._unwatch()
            self._unwatch = None
        self.items = []
        self.loading = False
        self.initialized = False

    def close(self) -> None:
        self.reset()
        self.context.institution_id = None

    def subscribe(self, listener: Callable[[List[T]], None]) -> Callable[[], None]:
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener) if listener in self._listeners else None

    def _on_snapshot(self, rows: List[T]) -> None:
        self.items = self.prepare(rows)
        self.loading = False
        self.initialized = True
        for listener in list(self._listeners):
            listener(self.items)

    def prepare(self, rows: List[T]) -> List[T]:
        return rows

    # --- queries -----------------------------------------------------------

    def get(self, doc_id: str) -> Optional[T]:
        return next((item for item in self.items if item.id == doc_id), None)

    # --- mutations ---------------------------------------------------------

    def _require_institution(self) -> str:
        if not self.context.institution_id:
            raise InstitutionContextMissing()
        return self.context.institution_id

    def add(self, **fields) -> str:
        institution_id = self._require_institution()
        now = datetime.now()
        payload = {**fields, "institution_id": institution_id}
        for column in ("created_at", "updated_at"):
            if hasattr(self.model, column):
                payload[column] = now
        return self.gateway.create(self.model, payload)

    def update(self, doc_id: str, **fields) -> None:
        institution_id = self._require_institution()
        changes = {k: v for k, v in fields.items() if k not in PROTECTED_FIELDS}
        if hasattr(self.model, "updated_at"):
            changes["updated_at"] = datetime.now()
        self.gateway.update(self.model, doc_id, changes, institution_id=institution_id)

    def delete(self, doc_id: str) -> None:
        institution_id = self._require_institution()
        self.gateway.delete(self.model, doc_id, institution_id=institution_id)
