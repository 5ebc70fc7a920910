"""
Travel API Backend — Application Package Initializer
====================================================

What: Marks the `travel_api` directory as a Python package.
Why:  Enables module imports like `from travel_api.config import settings`.
Who:  Used implicitly by Python's import system and explicitly by Alembic, pytest, and uvicorn.

Architecture Note:
    The backend keeps the same layering for every resource (users, places,
    agencies, likes, comments):

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← Access checks, query contracts
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

    Routes never touch SQL directly; services never build HTTP responses.
"""

__version__ = "1.0.0"
