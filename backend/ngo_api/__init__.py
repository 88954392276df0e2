"""
NGO Site Backend - Application Package
======================================

What: HTTP backend for the NGO website (members with photos, events).
Who:  Imported by uvicorn (`uvicorn ngo_api.main:app`), Alembic and pytest.

Architecture Note:
    ┌─────────────────────────────────────┐
    │      Routes + Middleware (HTTP)     │  ← request parsing, status codes
    ├─────────────────────────────────────┤
    │     Services (lifecycle control)    │  ← member/event orchestration
    ├─────────────────────────────────────┤
    │  Record Store      │  Asset Store   │  ← SQLAlchemy or TinyDB │ files
    └─────────────────────────────────────┘

    Both stores are built once per application in `bootstrap.build_services`
    and handed to the routes through FastAPI dependencies.
"""

__version__ = "1.0.0"
