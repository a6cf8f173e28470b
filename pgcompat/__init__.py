"""
pgcompat - MySQL-style queries on PostgreSQL

Rewrites ? placeholders and a few MySQL functions into PostgreSQL syntax,
runs the statement through asyncpg, and hands results back in the shape
mysql2 callers expect.
"""

from pgcompat.compat import CompatDatabase, PromiseQuery, ResultRows, connect_database

__version__ = "1.0.0"

__all__ = [
    "CompatDatabase",
    "PromiseQuery",
    "ResultRows",
    "connect_database",
]
