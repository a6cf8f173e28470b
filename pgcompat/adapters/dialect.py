"""
MySQL -> PostgreSQL statement rewriting

Two passes run on every statement before it reaches the driver:

1. Function translation: a handful of MySQL scalar functions used by the
   legacy call sites are rewritten into PostgreSQL expressions.
2. Placeholder conversion: positional ? markers become $1, $2, ... in
   left-to-right order.

Both passes are plain text rewrites. They do not parse SQL, so a ? or a
function name inside a string literal or comment is rewritten too. Function
arguments must not contain a comma (DATE_FORMAT) or a closing parenthesis
(YEAR / MONTH); nested calls are out of reach.
"""

import logging
import re
from dataclasses import dataclass
from typing import Any, Optional, Pattern, Sequence, Tuple

from pgcompat.adapters.classifier import classify, with_returning

logger = logging.getLogger(__name__)


# =============================================================================
# FUNCTION TRANSLATION
# =============================================================================

# Ordered (pattern, replacement) pairs. Each pattern only matches MySQL syntax,
# so running the table twice is the same as running it once.
FUNCTION_TRANSLATIONS: Tuple[Tuple[Pattern[str], str], ...] = (
    # DATE_FORMAT(x, '%d/%m/%Y') -> to_char(x,'DD/MM/YYYY')
    (
        re.compile(r"\bDATE_FORMAT\(\s*([^,]+?)\s*,\s*'%d/%m/%Y'\s*\)", re.IGNORECASE),
        r"to_char(\1,'DD/MM/YYYY')",
    ),
    # YEAR(x) -> EXTRACT(YEAR FROM x)
    (
        re.compile(r"\bYEAR\(\s*([^)]+?)\s*\)", re.IGNORECASE),
        r"EXTRACT(YEAR FROM \1)",
    ),
    # MONTH(x) -> EXTRACT(MONTH FROM x)
    (
        re.compile(r"\bMONTH\(\s*([^)]+?)\s*\)", re.IGNORECASE),
        r"EXTRACT(MONTH FROM \1)",
    ),
)

_PG_PLACEHOLDER = re.compile(r"\$\d+")


def translate_functions(sql: str) -> str:
    """Rewrite supported MySQL scalar functions into PostgreSQL equivalents."""
    for pattern, replacement in FUNCTION_TRANSLATIONS:
        sql = pattern.sub(replacement, sql)
    return sql


# =============================================================================
# PLACEHOLDERS
# =============================================================================

def has_pg_placeholders(sql: str) -> bool:
    """True if the statement already uses $n markers."""
    return _PG_PLACEHOLDER.search(sql) is not None


def count_placeholders(sql: str) -> int:
    """Number of ? markers in the statement."""
    return sql.count("?")


def to_pg_placeholders(sql: str, params: Optional[Sequence[Any]] = None) -> str:
    """
    Convert a MySQL-style statement to PostgreSQL.

    Functions are always translated. ? markers are converted to $1..$n only
    when there are parameters and the statement has no $n marker yet; a
    statement that already carries one is treated as pre-translated and its
    ? markers are left alone.

    The number of converted markers is not checked against len(params). A
    mismatch surfaces as a driver error at execution time.
    """
    if not params:
        return translate_functions(sql)

    if has_pg_placeholders(sql):
        return translate_functions(sql)

    sql = translate_functions(sql)

    result = []
    param_count = 0
    for ch in sql:
        if ch == "?":
            param_count += 1
            result.append(f"${param_count}")
        else:
            result.append(ch)

    return "".join(result)


# =============================================================================
# FULL REWRITE
# =============================================================================

@dataclass(frozen=True)
class RewriteOutcome:
    """
    Everything the facade needs to execute a statement.

    params is the caller's sequence itself; rewriting only changes text.
    """
    sql: str
    params: Optional[Sequence[Any]]
    is_insert: bool
    is_mutation: bool
    returning_added: bool


def rewrite(sql: str, params: Optional[Sequence[Any]] = None, id_column: str = "id") -> RewriteOutcome:
    """Translate, convert placeholders, and append RETURNING when needed."""
    pg_sql = to_pg_placeholders(sql, params)
    classification = classify(pg_sql)
    final_sql = with_returning(pg_sql, classification, id_column)

    if classification.needs_returning:
        logger.debug(f"Appended RETURNING {id_column} to INSERT")
    logger.debug(f"Rewrote statement: {final_sql}")

    return RewriteOutcome(
        sql=final_sql,
        params=params,
        is_insert=classification.is_insert,
        is_mutation=classification.is_mutation,
        returning_added=classification.needs_returning,
    )
