"""
NGO Site Backend - TinyDB Record Store
======================================

What:  RecordStore backend over a single JSON document file (TinyDB), the
       no-database deployment of the site.
How:   One TinyDB table per record kind ("members", "events") inside the file
       at JSON_DB_PATH. Documents carry their own "id" field; TinyDB's
       integer doc ids are never exposed. Timestamps are stored as ISO-8601
       strings and parsed back on read.

File layout:
    {
      "members": {"1": {"id": "9f1c...", "name": "Asha", ..., "created_at": "2024-..."}},
      "events":  {"1": {...}}
    }

Calls into TinyDB are synchronous; each operation completes without
yielding to the event loop.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List

from tinydb import Query, TinyDB

from ngo_api.exceptions import DatabaseError, NotFoundError
from ngo_api.services.record_store import Record, RecordKind, RecordStore

logger = logging.getLogger(__name__)

Q = Query()

_TIMESTAMPS = ("created_at", "updated_at")


def open_document_db(path: str) -> TinyDB:
    """Open (creating if needed) the TinyDB file and its parent directory."""
    db_path = Path(path)
    db_path.parent.mkdir(parents=True, exist_ok=True)
    return TinyDB(str(db_path))


class JsonRecordStore(RecordStore):
    """Record store backed by one TinyDB table."""

    def __init__(self, kind: RecordKind, db: TinyDB):
        super().__init__(kind)
        self._table = db.table(kind.table)

    @staticmethod
    def _encode(values: Dict[str, Any]) -> Dict[str, Any]:
        return {
            k: v.isoformat() if isinstance(v, datetime) else v
            for k, v in values.items()
        }

    def _decode(self, document: Dict[str, Any]) -> Record:
        record = {column: document.get(column) for column in self.kind.columns}
        for column in _TIMESTAMPS:
            if isinstance(record[column], str):
                record[column] = datetime.fromisoformat(record[column])
        return record

    def _database_error(self, action: str, exc: Exception) -> DatabaseError:
        logger.error("Document store error during %s %s: %s", action, self.kind.name, exc)
        return DatabaseError(
            message=f"Could not {action} {self.kind.name}: {exc}",
            context={"error_type": type(exc).__name__, "table": self.kind.table},
        )

    async def _insert(self, record: Record) -> Record:
        try:
            self._table.insert(self._encode(record))
        except (OSError, ValueError) as e:
            raise self._database_error("create", e)
        return dict(record)

    async def _fetch(self, record_id: str) -> Record:
        try:
            document = self._table.get(Q.id == record_id)
        except (OSError, ValueError) as e:
            raise self._database_error("fetch", e)
        if document is None:
            raise NotFoundError(resource=self.kind.name, resource_id=record_id)
        return self._decode(document)

    async def _fetch_all(self) -> List[Record]:
        try:
            documents = self._table.all()
        except (OSError, ValueError) as e:
            raise self._database_error("list", e)
        return [self._decode(document) for document in documents]

    async def _patch(self, record_id: str, changes: Record) -> Record:
        try:
            updated = self._table.update(self._encode(changes), Q.id == record_id)
        except (OSError, ValueError) as e:
            raise self._database_error("update", e)
        if not updated:
            raise NotFoundError(resource=self.kind.name, resource_id=record_id)
        return await self._fetch(record_id)

    async def _remove(self, record_id: str) -> Record:
        existing = await self._fetch(record_id)
        try:
            self._table.remove(Q.id == record_id)
        except (OSError, ValueError) as e:
            raise self._database_error("delete", e)
        return existing

    async def ping(self) -> None:
        try:
            len(self._table)
        except (OSError, ValueError) as e:
            raise self._database_error("read", e)
