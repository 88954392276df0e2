"""
NGO Site Backend - Service Wiring
=================================

What:  Builds the process-wide stores and services from Settings and owns
       their startup/shutdown.
How:   `build_services(settings)` picks the record backend named by
       STORAGE_BACKEND and returns an `AppServices` container. create_app()
       keeps it on `app.state.services`; routes reach it through
       `dependencies.py`.

    STORAGE_BACKEND=database            STORAGE_BACKEND=json
    ┌──────────────────────────┐        ┌──────────────────────────┐
    │ AsyncEngine + sessions   │        │ TinyDB(JSON_DB_PATH)     │
    │ SqlRecordStore(MEMBER)   │        │ JsonRecordStore(MEMBER)  │
    │ SqlRecordStore(EVENT)    │        │ JsonRecordStore(EVENT)   │
    └──────────────────────────┘        └──────────────────────────┘
                   └──────── LocalAssetStore(UPLOAD_DIR) ────────┘
"""

import logging
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncEngine
from tinydb import TinyDB

from ngo_api.config import Settings
from ngo_api.database import build_engine, build_session_factory, create_tables, dispose_engine
from ngo_api.services.asset_store import LocalAssetStore
from ngo_api.services.event_service import EventService
from ngo_api.services.json_store import JsonRecordStore, open_document_db
from ngo_api.services.member_service import MemberService
from ngo_api.services.record_store import EVENT, MEMBER, RecordStore
from ngo_api.services.sql_store import SqlRecordStore

logger = logging.getLogger(__name__)


@dataclass
class AppServices:
    settings: Settings
    assets: LocalAssetStore
    member_records: RecordStore
    event_records: RecordStore
    members: MemberService
    events: EventService
    engine: Optional[AsyncEngine] = None
    document_db: Optional[TinyDB] = None

    async def startup(self) -> None:
        if self.engine is not None and self.settings.db_auto_create:
            await create_tables(self.engine)
            logger.info("Database tables ensured")
        logger.info("Record backend: %s", self.settings.storage_backend)

    async def shutdown(self) -> None:
        if self.engine is not None:
            await dispose_engine(self.engine)
        if self.document_db is not None:
            self.document_db.close()


def build_services(settings: Settings) -> AppServices:
    assets = LocalAssetStore(
        upload_dir=settings.upload_dir,
        public_base_url=settings.public_base_url,
        max_file_size=settings.max_file_size,
    )

    engine: Optional[AsyncEngine] = None
    document_db: Optional[TinyDB] = None
    if settings.storage_backend == "json":
        document_db = open_document_db(settings.json_db_path)
        member_records: RecordStore = JsonRecordStore(MEMBER, document_db)
        event_records: RecordStore = JsonRecordStore(EVENT, document_db)
    else:
        engine = build_engine(settings)
        session_factory = build_session_factory(engine)
        member_records = SqlRecordStore(MEMBER, session_factory)
        event_records = SqlRecordStore(EVENT, session_factory)

    return AppServices(
        settings=settings,
        assets=assets,
        member_records=member_records,
        event_records=event_records,
        members=MemberService(member_records, assets),
        events=EventService(event_records),
        engine=engine,
        document_db=document_db,
    )
