"""
Employee Roster API: Application Package Initializer
=====================================================

What: Marks the `roster` directory as a Python package.
Why:  Enables module imports like `from roster.config import settings`.
Who:  Used implicitly by Python's import system and explicitly by pytest and uvicorn.

Architecture Note:
    The service follows the same layered layout for a single resource:

    ┌─────────────────────────────────────┐
    │        Routes (API Layer)           │  ← HTTP verbs, status codes, id resolution
    ├─────────────────────────────────────┤
    │      Services (Query Mapping)       │  ← One storage call per operation
    ├─────────────────────────────────────┤
    │    Models & Schemas (Record Shape)  │  ← SQLAlchemy record + Pydantic wire format
    ├─────────────────────────────────────┤
    │      Storage Client (Persistence)   │  ← Async engine owned by one injectable object
    └─────────────────────────────────────┘

    Routes never touch the engine directly; they receive a session from the
    storage client that the application factory created at startup.
"""

__version__ = "1.1.0"
