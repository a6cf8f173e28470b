"""
Adapters for pgcompat

This package turns MySQL-flavoured statements into PostgreSQL ones and runs
them. Each piece is usable on its own:

- dialect: function translation and ? -> $n placeholder conversion
- classifier: mutation detection and RETURNING synthesis
- normalizer: native result -> {rows, meta}
- postgres_adapter: asyncpg-backed store client
"""

from pgcompat.adapters.base import (
    AdapterError,
    ConnectionError,
    ExecutionResult,
    NormalizedResult,
    QueryError,
    StoreClient,
)
from pgcompat.adapters.classifier import Classification, classify, with_returning
from pgcompat.adapters.dialect import (
    RewriteOutcome,
    rewrite,
    to_pg_placeholders,
    translate_functions,
)
from pgcompat.adapters.normalizer import normalize
from pgcompat.adapters.postgres_adapter import PostgresAdapter

__all__ = [
    "AdapterError",
    "ConnectionError",
    "ExecutionResult",
    "NormalizedResult",
    "QueryError",
    "StoreClient",
    "Classification",
    "classify",
    "with_returning",
    "RewriteOutcome",
    "rewrite",
    "to_pg_placeholders",
    "translate_functions",
    "normalize",
    "PostgresAdapter",
]
