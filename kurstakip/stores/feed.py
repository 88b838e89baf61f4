from __future__ import annotations

import itertools
import logging
import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Type

logger = logging.getLogger(__name__)

SnapshotCallback = Callable[[List[Any]], None]


@dataclass
class Subscription:
    id: int
    table: str
    model: Type
    schema: Type
    filters: Dict[str, Any] = field(default_factory=dict)
    callback: SnapshotCallback = None


class ChangeFeed:
    """
    Registry of live queries.
    The gateway asks it which subscriptions watch a table after each committed write.
    """

    def __init__(self):
        self._subscriptions: Dict[int, Subscription] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def register(self, model, schema, filters: Dict[str, Any], callback: SnapshotCallback) -> Subscription:
        with self._lock:
            sub = Subscription(
                id=next(self._ids),
                table=model.__tablename__,
                model=model,
                schema=schema,
                filters=dict(filters),
                callback=callback,
            )
            self._subscriptions[sub.id] = sub
        logger.debug("Subscribed #%s to %s where %s", sub.id, sub.table, sub.filters)
        return sub

    def unregister(self, sub_id: int) -> None:
        with self._lock:
            sub = self._subscriptions.pop(sub_id, None)
        if sub:
            logger.debug("Unsubscribed #%s from %s", sub.id, sub.table)

    def watching(self, table: str) -> List[Subscription]:
        with self._lock:
            return [s for s in self._subscriptions.values() if s.table == table]

    def __len__(self) -> int:
        return len(self._subscriptions)
