"""Public port exports for concrete dialect implementations."""

from .dialects import Dialect, MySQLDialect, PostgresDialect, SQLiteDialect, dialect_for_name

__all__ = [
    "Dialect",
    "SQLiteDialect",
    "PostgresDialect",
    "MySQLDialect",
    "dialect_for_name",
]
