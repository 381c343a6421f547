"""
CaseDesk Backend: Application Package
=====================================

What:  Support-case and note tracking API with token-gated writes.
Who:   Imported by uvicorn (``casedesk.main:create_app``), pytest and the
       ``casedesk`` console script.

Architecture Note:
    The backend keeps the usual layered split:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns, status codes
    ├─────────────────────────────────────┤
    │   Auth Guard (FastAPI dependency)   │  ← bearer token gate on writes
    ├─────────────────────────────────────┤
    │         Services (Record Logic)     │  ← sanitize, one statement each
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy tables + Pydantic
    ├─────────────────────────────────────┤
    │   DataStore gateway (Persistence)   │  ← pooled async SQLAlchemy engine
    └─────────────────────────────────────┘

    Configuration is a single ``Settings`` object built at startup and handed
    to the components that need it; nothing reads the environment after that.
"""

__version__ = "1.0.0"
