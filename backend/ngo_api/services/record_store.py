"""
NGO Site Backend - Record Store Interface
=========================================

What:  Backend-neutral CRUD contract for structured records (members, events).
How:   `RecordStore` is an abstract base class parameterized by a
       `RecordKind`, which names the fields, the required fields and their
       defaults. Concrete backends:
           - SqlRecordStore  (services/sql_store.py, async SQLAlchemy)
           - JsonRecordStore (services/json_store.py, TinyDB document file)
Who:   MemberService and EventService; built by bootstrap.build_services().

Record shape (plain dict, snake_case keys):
    {"id": "9f1c...", <kind fields>, "created_at": datetime, "updated_at": datetime}

Contract shared by every backend:
    create(fields)          fresh id, timestamps, defaults; ValidationError on
                            missing/blank required field
    get(id)                 NotFoundError when absent
    list_all()              creation order, no pagination
    update(id, fields)      NotFoundError first, then field checks; merges
                            given keys only, bumps updated_at
    delete(id)              returns the removed record
    Backend failures surface as DatabaseError (a StorageError).
"""

import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Tuple

from ngo_api.exceptions import ValidationError

Record = Dict[str, Any]


@dataclass(frozen=True)
class RecordKind:
    """Describes one record type: its table and its writable fields."""

    name: str
    table: str
    fields: Tuple[str, ...]
    required: Tuple[str, ...]
    defaults: Mapping[str, Any] = field(default_factory=dict)

    @property
    def columns(self) -> Tuple[str, ...]:
        return ("id",) + self.fields + ("created_at", "updated_at")


MEMBER = RecordKind(
    name="member",
    table="members",
    fields=("name", "position", "description", "achievements", "image_ref"),
    required=("name", "position"),
    defaults={"description": "", "achievements": "", "image_ref": None},
)

EVENT = RecordKind(
    name="event",
    table="events",
    fields=(
        "title",
        "description",
        "date",
        "time",
        "location",
        "volunteers_needed",
        "category",
    ),
    required=("title", "date", "time"),
    defaults={"description": "", "location": "", "volunteers_needed": None, "category": ""},
)


def new_record_id() -> str:
    return uuid.uuid4().hex


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


class RecordStore(ABC):
    """
    Abstract CRUD store for one record kind.

    Subclasses implement the `_insert` / `_fetch` / `_fetch_all` / `_patch` /
    `_remove` primitives; validation, defaults and timestamps live here so
    both backends behave identically.
    """

    def __init__(self, kind: RecordKind):
        self.kind = kind

    # ── Field handling ────────────────────────────────────────────────────

    def _writable(self, fields: Mapping[str, Any]) -> Record:
        """Drop keys that are not fields of this kind (id and timestamps included)."""
        return {k: v for k, v in fields.items() if k in self.kind.fields}

    def _check_required(self, values: Mapping[str, Any], partial: bool) -> None:
        for name in self.kind.required:
            if name not in values:
                if partial:
                    continue
                raise ValidationError(
                    message=f"{self.kind.name.capitalize()} field '{name}' is required",
                    field=name,
                )
            if _is_blank(values[name]):
                raise ValidationError(
                    message=f"{self.kind.name.capitalize()} field '{name}' must not be empty",
                    field=name,
                )

    # ── Public contract ───────────────────────────────────────────────────

    async def create(self, fields: Mapping[str, Any]) -> Record:
        values = self._writable(fields)
        self._check_required(values, partial=False)
        now = utcnow()
        record: Record = {name: self.kind.defaults.get(name) for name in self.kind.fields}
        record.update(values)
        record.update(id=new_record_id(), created_at=now, updated_at=now)
        return await self._insert(record)

    async def get(self, record_id: str) -> Record:
        return await self._fetch(record_id)

    async def list_all(self) -> List[Record]:
        return await self._fetch_all()

    async def update(self, record_id: str, fields: Mapping[str, Any]) -> Record:
        # Unknown ids answer NotFoundError before any field is validated
        await self._fetch(record_id)
        changes = self._writable(fields)
        self._check_required(changes, partial=True)
        changes["updated_at"] = utcnow()
        return await self._patch(record_id, changes)

    async def delete(self, record_id: str) -> Record:
        return await self._remove(record_id)

    # ── Backend primitives ────────────────────────────────────────────────

    @abstractmethod
    async def _insert(self, record: Record) -> Record:
        ...

    @abstractmethod
    async def _fetch(self, record_id: str) -> Record:
        """Return the record or raise NotFoundError."""

    @abstractmethod
    async def _fetch_all(self) -> List[Record]:
        ...

    @abstractmethod
    async def _patch(self, record_id: str, changes: Record) -> Record:
        """Merge changes into the record or raise NotFoundError."""

    @abstractmethod
    async def _remove(self, record_id: str) -> Record:
        """Delete and return the record or raise NotFoundError."""

    @abstractmethod
    async def ping(self) -> None:
        """Raise StorageError if the backend cannot be reached."""
