"""Database layer - engine, base classes, and column types."""

from monitor_kernel.db.base import UUID, Base, TrackedBase, UIntString, UUIDString
from monitor_kernel.db.engine import (
    create_tables,
    get_engine,
    get_session,
    init_engine_from_url,
    session_scope,
)
from monitor_kernel.db.types import NULL_ADDRESS, is_null_address

__all__ = [
    "get_engine",
    "get_session",
    "init_engine_from_url",
    "session_scope",
    "create_tables",
    "Base",
    "TrackedBase",
    "UIntString",
    "UUIDString",
    "UUID",
    "NULL_ADDRESS",
    "is_null_address",
]
