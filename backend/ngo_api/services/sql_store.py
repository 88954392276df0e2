"""
NGO Site Backend - SQLAlchemy Record Store
==========================================

What:  RecordStore backend over async SQLAlchemy (PostgreSQL/asyncpg in
       production, SQLite/aiosqlite in tests).
How:   One session per operation through `database.session_scope()`;
       the ORM model for the kind is looked up from MODEL_FOR_KIND.

Query plans:
    get / update / delete   primary key lookup (session.get)
    list_all                SELECT ... ORDER BY created_at  (idx_*_created_at)
"""

import logging
from datetime import datetime, timezone
from typing import Dict, List, Type

from sqlalchemy import select, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ngo_api.database import Base, session_scope
from ngo_api.exceptions import DatabaseError, NotFoundError
from ngo_api.models import Event, Member
from ngo_api.services.record_store import EVENT, MEMBER, Record, RecordKind, RecordStore

logger = logging.getLogger(__name__)

MODEL_FOR_KIND: Dict[str, Type[Base]] = {
    MEMBER.name: Member,
    EVENT.name: Event,
}


class SqlRecordStore(RecordStore):
    """Record store backed by one ORM-mapped table."""

    def __init__(self, kind: RecordKind, session_factory: async_sessionmaker[AsyncSession]):
        super().__init__(kind)
        self.model = MODEL_FOR_KIND[kind.name]
        self._session_factory = session_factory

    def _to_record(self, row) -> Record:
        record = {column: getattr(row, column) for column in self.kind.columns}
        # SQLite hands back naive datetimes; stored values are always UTC
        for column in ("created_at", "updated_at"):
            value = record[column]
            if isinstance(value, datetime) and value.tzinfo is None:
                record[column] = value.replace(tzinfo=timezone.utc)
        return record

    def _database_error(self, action: str, exc: SQLAlchemyError) -> DatabaseError:
        detail = str(getattr(exc, "orig", None) or exc)
        logger.error("Database error during %s %s: %s", action, self.kind.name, detail)
        return DatabaseError(
            message=f"Could not {action} {self.kind.name}: {detail}",
            context={"error_type": type(exc).__name__, "table": self.kind.table},
        )

    async def _insert(self, record: Record) -> Record:
        try:
            async with session_scope(self._session_factory) as session:
                row = self.model(**record)
                session.add(row)
                await session.flush()
                result = self._to_record(row)
        except SQLAlchemyError as e:
            raise self._database_error("create", e)
        logger.debug("Inserted %s %s", self.kind.name, result["id"])
        return result

    async def _fetch(self, record_id: str) -> Record:
        try:
            async with session_scope(self._session_factory) as session:
                row = await session.get(self.model, record_id)
                result = self._to_record(row) if row is not None else None
        except SQLAlchemyError as e:
            raise self._database_error("fetch", e)
        if result is None:
            raise NotFoundError(resource=self.kind.name, resource_id=record_id)
        return result

    async def _fetch_all(self) -> List[Record]:
        try:
            async with session_scope(self._session_factory) as session:
                rows = await session.execute(
                    select(self.model).order_by(self.model.created_at, self.model.id)
                )
                return [self._to_record(row) for row in rows.scalars().all()]
        except SQLAlchemyError as e:
            raise self._database_error("list", e)

    async def _patch(self, record_id: str, changes: Record) -> Record:
        try:
            async with session_scope(self._session_factory) as session:
                row = await session.get(self.model, record_id)
                if row is None:
                    raise NotFoundError(resource=self.kind.name, resource_id=record_id)
                for column, value in changes.items():
                    setattr(row, column, value)
                await session.flush()
                return self._to_record(row)
        except SQLAlchemyError as e:
            raise self._database_error("update", e)

    async def _remove(self, record_id: str) -> Record:
        try:
            async with session_scope(self._session_factory) as session:
                row = await session.get(self.model, record_id)
                if row is None:
                    raise NotFoundError(resource=self.kind.name, resource_id=record_id)
                result = self._to_record(row)
                await session.delete(row)
                return result
        except SQLAlchemyError as e:
            raise self._database_error("delete", e)

    async def ping(self) -> None:
        try:
            async with session_scope(self._session_factory) as session:
                await session.execute(text("SELECT 1"))
        except SQLAlchemyError as e:
            raise self._database_error("reach database for", e)
