"""
ClimaTask Backend — Application Package Initializer
====================================================

What: Marks the `climatask` directory as a Python package.
Who:  Imported by uvicorn (climatask.main:app), Alembic and pytest.

Architecture Note:
    The backend is split into thin layers:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← hashing, projections, upstream calls
    ├─────────────────────────────────────┤
    │     Repositories (Persistence)      │  ← typed CRUD per entity
    ├─────────────────────────────────────┤
    │   Models & Schemas / Database       │  ← SQLAlchemy ORM + Pydantic
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
