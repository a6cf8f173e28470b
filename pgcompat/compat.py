"""
mysql2-style facade over PostgreSQL

Legacy call sites were written against mysql2 and expect its two calling
conventions. CompatDatabase provides both on top of a single run() primitive:

    # completion style
    db.query_with_params("SELECT * FROM san_pham WHERE ncc = ?", [ncc], on_complete)
    db.query_no_params("SELECT * FROM san_pham", on_complete)

    def on_complete(err, rows=None, fields=None):
        ...

    # awaitable style
    [rows] = await db.promise().query("DELETE FROM tonkho WHERE id = ?", [7])
    rows.affected_rows

Mutations report affected_rows, inserts also report insert_id, both as
attributes on the returned row list. Errors from the driver reach the caller
unchanged.

run() keeps no state between calls, so any number of calls may be in flight
on the same CompatDatabase. Pool sizing and timeouts belong to the client.
"""

import asyncio
import logging
from typing import Any, Callable, Dict, List, Optional, Sequence

from pgcompat.adapters.base import NormalizedResult, StoreClient
from pgcompat.adapters.classifier import Classification
from pgcompat.adapters.dialect import rewrite
from pgcompat.adapters.normalizer import normalize
from pgcompat.adapters.postgres_adapter import PostgresAdapter
from pgcompat.core.config import Settings, get_settings

logger = logging.getLogger(__name__)

CompletionHandler = Callable[..., Any]

_META_ATTRIBUTES = ("affected_rows", "insert_id")


class ResultRows(list):
    """
    Row list in the shape mysql2 callers expect.

    Carries affected_rows and/or insert_id as attributes when the statement
    reported them. For a SELECT neither attribute exists.
    """


def to_result_rows(rows: List[Dict[str, Any]], meta: Dict[str, Any]) -> ResultRows:
    results = ResultRows(rows)
    for name in _META_ATTRIBUTES:
        if name in meta:
            setattr(results, name, meta[name])
    return results


class PromiseQuery:
    """Awaitable calling convention, returned by CompatDatabase.promise()."""

    def __init__(self, db: "CompatDatabase"):
        self._db = db

    async def query(self, sql: str, params: Optional[Sequence[Any]] = None) -> List[ResultRows]:
        """
        Run a statement and return [rows].

        mysql2 returns [rows, fields]; only the first slot is populated here.
        """
        result = await self._db.run(sql, params)
        return [to_result_rows(result.rows, result.meta)]


class CompatDatabase:
    """
    mysql2-compatible query interface over a PostgreSQL store client.

    Args:
        client: Connected store client (PostgresAdapter or anything with an
                awaitable execute(sql, params) -> ExecutionResult)
        id_column: Column returned by synthesized RETURNING clauses
    """

    def __init__(self, client: StoreClient, id_column: str = "id"):
        self._client = client
        self.id_column = id_column

    @property
    def client(self) -> StoreClient:
        return self._client

    async def run(self, sql: str, params: Optional[Sequence[Any]] = None) -> NormalizedResult:
        """Rewrite, execute once, and normalize."""
        outcome = rewrite(sql, params, self.id_column)
        native = await self._client.execute(outcome.sql, outcome.params or [])
        classification = Classification(
            is_insert=outcome.is_insert,
            is_mutation=outcome.is_mutation,
            needs_returning=outcome.returning_added,
        )
        return normalize(native, classification, self.id_column)

    # -------------------------------------------------------------------------
    # Completion style
    # -------------------------------------------------------------------------

    def query_with_params(
        self,
        sql: str,
        params: Optional[Sequence[Any]],
        on_complete: CompletionHandler,
    ) -> "asyncio.Task":
        """
        Schedule a statement and report through on_complete.

        Success: on_complete(None, rows, None). Failure: on_complete(err).
        Must be called with a running event loop; the returned task can be
        awaited but never raises the query error itself.
        """
        loop = asyncio.get_running_loop()
        return loop.create_task(self._complete(sql, params, on_complete))

    def query_no_params(self, sql: str, on_complete: CompletionHandler) -> "asyncio.Task":
        """Same as query_with_params with no parameters."""
        return self.query_with_params(sql, None, on_complete)

    async def _complete(
        self,
        sql: str,
        params: Optional[Sequence[Any]],
        on_complete: CompletionHandler,
    ) -> None:
        try:
            result = await self.run(sql, params)
        except Exception as e:
            logger.debug(f"Query failed: {type(e).__name__}: {e}")
            on_complete(e)
            return
        on_complete(None, to_result_rows(result.rows, result.meta), None)

    # -------------------------------------------------------------------------
    # Awaitable style
    # -------------------------------------------------------------------------

    def promise(self) -> PromiseQuery:
        return PromiseQuery(self)

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    async def close(self) -> None:
        """Dispose of the store client if it supports it."""
        disconnect = getattr(self._client, "disconnect", None)
        if disconnect is not None:
            await disconnect()


async def connect_database(settings: Optional[Settings] = None) -> CompatDatabase:
    """
    Build, connect and wrap a PostgresAdapter.

    Call once at process start and close() the result at shutdown.
    """
    settings = settings or get_settings()
    adapter = PostgresAdapter(settings.to_adapter_config())
    await adapter.connect()
    return CompatDatabase(adapter, id_column=settings.id_column)
