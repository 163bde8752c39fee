"""
Noteful Backend — Application Package Initializer
=================================================

What: Marks the `app` directory as a Python package.
Why:  Enables module imports like `from app.config import settings`.
Who:  Used implicitly by Python's import system and explicitly by Alembic, pytest, and uvicorn.

Architecture Note:
    This backend follows a layered architecture:

    ┌─────────────────────────────────────┐
    │      Routes + Dependencies (API)    │  ← HTTP concerns, token verification
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← Validation, ownership scoping
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

    Routes never query the database directly; services never build HTTP
    responses. Both layers raise exceptions from app.exceptions and let the
    global handlers in main.py pick the status code.
"""

__version__ = "1.0.0"
