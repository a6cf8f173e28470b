"""
Base types for pgcompat adapters

The compatibility layer talks to PostgreSQL through a store client. The client
is built once at process start, passed to the facade, and closed at shutdown.

DESIGN PRINCIPLES:
-----------------
1. Statements arrive with ? placeholders (rewritten to $n before execution)
2. Results come back as list of dicts (engine-agnostic)
3. Lifecycle problems raise AdapterError subclasses
4. Driver errors from execute() propagate untouched
5. The facade holds no state between calls
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Protocol, Sequence


class AdapterError(Exception):
    """Base exception for adapter errors."""

    def __init__(self, message: str, engine: str, original_error: Optional[Exception] = None):
        super().__init__(message)
        self.engine = engine
        self.original_error = original_error


class ConnectionError(AdapterError):
    """Failed to connect to database."""
    pass


class QueryError(AdapterError):
    """Query could not be issued (e.g. adapter not connected)."""
    pass


@dataclass
class ExecutionResult:
    """
    Native result of a single round trip.

    Attributes:
        rows: Returned rows as dicts (empty list when none)
        row_count: Row count from the command status tag, None if unknown
        status: Raw command status tag (e.g. "INSERT 0 1")
        sql: Executed SQL (with placeholders, not values)
        execution_time_ms: Round trip time in milliseconds
    """
    rows: List[Dict[str, Any]] = field(default_factory=list)
    row_count: Optional[int] = None
    status: str = ""
    sql: str = ""
    execution_time_ms: float = 0.0


@dataclass
class NormalizedResult:
    """
    Stable result contract handed back to callers.

    meta only ever carries the keys "affected_rows" (mutations) and
    "insert_id" (inserts). A key that does not apply is absent.
    """
    rows: List[Dict[str, Any]] = field(default_factory=list)
    meta: Dict[str, Any] = field(default_factory=dict)


class StoreClient(Protocol):
    """Anything that can run one statement against PostgreSQL."""

    async def execute(self, sql: str, params: Optional[Sequence[Any]] = None) -> ExecutionResult:
        ...
