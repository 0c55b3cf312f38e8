"""
Infrastructure module: Database sessions and request correlation.

Provides:
- Database sessions and transactions (db.py)
- Correlation IDs for request-scoped logging (correlation.py)
"""

from shared.infrastructure.db import (
    engine,
    SessionLocal,
    get_db,
    get_db_context,
    safe_commit,
)

__all__ = [
    # db
    "engine",
    "SessionLocal",
    "get_db",
    "get_db_context",
    "safe_commit",
]
