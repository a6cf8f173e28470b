"""
PostgreSQL store client for pgcompat

Runs already-rewritten statements ($n placeholders) through an asyncpg
connection pool. The pool is created by connect() and closed by disconnect();
nothing is created at import time.

Features:
- Connection pooling (min/max size, idle lifetime)
- SSL support (sslmode string; the DSN sslmode applies when unset)
- Row count taken from the command status tag
"""

import logging
import time
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Sequence

import asyncpg

from pgcompat.adapters.base import ConnectionError, ExecutionResult, QueryError

logger = logging.getLogger(__name__)


def parse_row_count(status: Optional[str]) -> Optional[int]:
    """
    Extract the row count from a PostgreSQL command status tag.

    "INSERT 0 1" -> 1, "UPDATE 3" -> 3, "SELECT 0" -> 0,
    "CREATE TABLE" -> None.
    """
    if not status:
        return None
    last = status.rsplit(" ", 1)[-1]
    if last.isdigit():
        return int(last)
    return None


class PostgresAdapter:
    """
    Store client for PostgreSQL.

    Config options:
        dsn: Connection string (required)
        ssl: sslmode string overriding the DSN (default: none, DSN decides)
        min_size: Minimum pool size (default: 1)
        max_size: Maximum pool size (default: 10)
        connect_timeout: Connection timeout in seconds (default: 10)
        command_timeout: Per-statement timeout in seconds (default: none)
        idle_timeout: Seconds before an idle connection is closed (default: 300)

    Example:
        adapter = PostgresAdapter({"dsn": "postgresql://app@db/inventory"})
        await adapter.connect()
        result = await adapter.execute("SELECT * FROM san_pham WHERE id = $1", [7])
        await adapter.disconnect()
    """

    ENGINE = "postgres"
    PLACEHOLDER = "$n"

    def __init__(self, config: Dict[str, Any]):
        """Initialize PostgreSQL adapter."""
        self.config = config

        if not config.get("dsn"):
            raise ConnectionError(
                "Missing required config: dsn (set DATABASE_URL)",
                engine=self.ENGINE
            )

        self.dsn = config["dsn"]
        self.ssl = config.get("ssl")
        self.min_size = config.get("min_size", 1)
        self.max_size = config.get("max_size", 10)
        self.connect_timeout = config.get("connect_timeout", 10.0)
        self.command_timeout = config.get("command_timeout")
        self.idle_timeout = config.get("idle_timeout", 300.0)

        self._pool = None
        self._connected = False
        self._last_used = None

    @property
    def pool(self):
        """Underlying asyncpg pool (None until connected)."""
        return self._pool

    async def connect(self) -> None:
        """Create the connection pool."""
        pool_kwargs = {
            "dsn": self.dsn,
            "min_size": self.min_size,
            "max_size": self.max_size,
            "max_inactive_connection_lifetime": self.idle_timeout,
            "command_timeout": self.command_timeout,
            "timeout": self.connect_timeout,
        }
        # asyncpg lets ssl= win over the DSN's sslmode, so only pass it when set
        if self.ssl:
            pool_kwargs["ssl"] = self.ssl

        try:
            self._pool = await asyncpg.create_pool(**pool_kwargs)
        except Exception as e:
            raise ConnectionError(
                f"Failed to connect to PostgreSQL: {e}",
                engine=self.ENGINE,
                original_error=e
            )

        self._connected = True
        logger.info(f"PostgreSQL pool ready (min={self.min_size}, max={self.max_size})")

    async def disconnect(self) -> None:
        """Close the pool. Safe to call when not connected."""
        try:
            if self._pool is not None:
                await self._pool.close()
                logger.info("PostgreSQL pool closed")
        except Exception as e:
            logger.warning(f"Error closing PostgreSQL pool: {e}")
        finally:
            self._pool = None
            self._connected = False

    async def execute(self, sql: str, params: Optional[Sequence[Any]] = None) -> ExecutionResult:
        """
        Run one statement and return rows plus the reported row count.

        The statement must already use $n placeholders. Driver errors
        (asyncpg.PostgresError and friends) are raised as-is.
        """
        if not self._connected:
            raise QueryError(
                "Not connected to PostgreSQL",
                engine=self.ENGINE
            )

        self._update_last_used()
        start_time = time.perf_counter()

        async with self._pool.acquire() as conn:
            stmt = await conn.prepare(sql)
            records = await stmt.fetch(*(params or []))
            status = stmt.get_statusmsg()

        execution_time = (time.perf_counter() - start_time) * 1000
        row_count = parse_row_count(status)
        logger.debug(f"{status or 'statement'} in {execution_time:.1f}ms ({len(records)} rows)")

        return ExecutionResult(
            rows=[dict(r) for r in records],
            row_count=row_count,
            status=status or "",
            sql=sql,
            execution_time_ms=execution_time,
        )

    async def health_check(self) -> bool:
        """Check PostgreSQL connection health."""
        if not self._connected:
            return False

        try:
            async with self._pool.acquire() as conn:
                await conn.fetchval("SELECT 1")
            return True
        except Exception:
            return False

    def is_connected(self) -> bool:
        """Check if adapter has an active pool."""
        return self._connected

    def get_engine_info(self) -> Dict[str, Any]:
        """Get information about this adapter/engine."""
        return {
            "engine": self.ENGINE,
            "connected": self._connected,
            "placeholder": self.PLACEHOLDER,
            "last_used": self._last_used.isoformat() if self._last_used else None
        }

    def _update_last_used(self):
        self._last_used = datetime.now(timezone.utc)

    async def __aenter__(self):
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.disconnect()
        return False
