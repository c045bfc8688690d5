"""
PhotoShare Backend — Application Package Initializer
====================================================

What: Marks the `photoshare` directory as a Python package.
Who:  Imported by uvicorn (`photoshare.main:app`), Alembic, and pytest.

Architecture Note:
    The backend is layered:

    ┌─────────────────────────────────────┐
    │     Routes + Auth Gate (HTTP)       │  ← status codes, headers, tokens
    ├─────────────────────────────────────┤
    │       Services (Business Logic)     │  ← credentials, photos, comments, media
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

    Routes never touch the ORM directly and services never see a Request
    object, so each layer can be tested on its own.
"""

__version__ = "1.0.0"
