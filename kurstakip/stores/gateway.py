from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional, Type
from uuid import uuid4

from sqlalchemy.orm import Session, sessionmaker

from kurstakip.errors import NotFoundError
from kurstakip.stores.feed import ChangeFeed, SnapshotCallback

logger = logging.getLogger(__name__)


class DocumentGateway:
    """
    Collection-style access to the database.

    Every write runs in its own session and commits before returning; afterwards every
    live query on the touched table is re-read and its full result pushed to the callback.
    """

    def __init__(self, session_factory: sessionmaker, feed: Optional[ChangeFeed] = None):
        self.session_factory = session_factory
        self.feed = feed or ChangeFeed()

    # --- reads -------------------------------------------------------------

    def find(self, model, schema, **filters) -> List[Any]:
        with self.session_factory() as db:
            rows = db.query(model).filter_by(**filters).all()
            return [schema.model_validate(row) for row in rows]

    def get(self, model, schema, doc_id: str, **scope) -> Optional[Any]:
        with self.session_factory() as db:
            row = self._scoped(db, model, doc_id, scope)
            return schema.model_validate(row) if row else None

    # --- writes ------------------------------------------------------------

    def create(self, model, fields: Dict[str, Any]) -> str:
        doc_id = fields.get("id") or str(uuid4())
        with self.session_factory() as db:
            db.add(model(**{**fields, "id": doc_id}))
            db.commit()
        self._publish(model.__tablename__)
        return doc_id

    def update(self, model, doc_id: str, fields: Dict[str, Any], **scope) -> None:
        with self.session_factory() as db:
            if not fields:
                if self._scoped(db, model, doc_id, scope) is None:
                    raise NotFoundError(model.__name__, doc_id)
                return
            # scope and write in one statement
            matched = (
                db.query(model)
                .filter_by(id=doc_id, **scope)
                .update(fields, synchronize_session=False)
            )
            if not matched:
                db.rollback()
                raise NotFoundError(model.__name__, doc_id)
            db.commit()
        self._publish(model.__tablename__)

    def delete(self, model, doc_id: str, **scope) -> None:
        with self.session_factory() as db:
            row = self._scoped(db, model, doc_id, scope)
            if row is None:
                raise NotFoundError(model.__name__, doc_id)
            db.delete(row)
            db.commit()
        self._publish(model.__tablename__)

    # --- live queries ------------------------------------------------------

    def watch(self, model, schema, filters: Dict[str, Any], callback: SnapshotCallback) -> Callable[[], None]:
        """Pushes the current snapshot right away, then again after every write to the table."""
        sub = self.feed.register(model, schema, filters, callback)
        callback(self.find(model, schema, **filters))
        return lambda: self.feed.unregister(sub.id)

    def _publish(self, table: str) -> None:
        for sub in self.feed.watching(table):
            snapshot = self.find(sub.model, sub.schema, **sub.filters)
            try:
                sub.callback(snapshot)
            except Exception:
                # one broken listener must not hide a committed write from the others
                logger.exception("Snapshot listener #%s on %s failed", sub.id, table)

    @staticmethod
    def _scoped(db: Session, model: Type, doc_id: str, scope: Dict[str, Any]):
        return db.query(model).filter_by(id=doc_id, **scope).first()
