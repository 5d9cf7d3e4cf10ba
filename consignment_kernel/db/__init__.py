"""Database layer - engine, base classes and session scope."""

from consignment_kernel.db.base import Base, TrackedBase, UUIDString
from consignment_kernel.db.engine import (
    create_tables,
    get_engine,
    get_session,
    session_scope,
)

__all__ = [
    "get_engine",
    "get_session",
    "session_scope",
    "create_tables",
    "Base",
    "TrackedBase",
    "UUIDString",
]
