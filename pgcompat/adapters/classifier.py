"""
Statement classification

Decides whether a rewritten statement is a mutation, and whether an INSERT
needs a RETURNING clause so the generated identifier can be reported the way
MySQL's insertId is.
"""

import re
from dataclasses import dataclass

_MUTATION = re.compile(r"^\s*(INSERT|UPDATE|DELETE)\b", re.IGNORECASE)
_INSERT = re.compile(r"^\s*INSERT\b", re.IGNORECASE)

# Matches anywhere in the text, including literals and comments. A statement
# mentioning RETURNING in a string therefore gets no synthesized clause.
_RETURNING = re.compile(r"\bRETURNING\b", re.IGNORECASE)


@dataclass(frozen=True)
class Classification:
    is_insert: bool = False
    is_mutation: bool = False
    needs_returning: bool = False


def classify(sql: str) -> Classification:
    """Classify a statement by its first keyword."""
    is_mutation = _MUTATION.match(sql) is not None
    is_insert = _INSERT.match(sql) is not None
    needs_returning = is_insert and _RETURNING.search(sql) is None
    return Classification(
        is_insert=is_insert,
        is_mutation=is_mutation,
        needs_returning=needs_returning,
    )


def with_returning(sql: str, classification: Classification, id_column: str = "id") -> str:
    """Append RETURNING <id_column> when the classification asks for it."""
    if not classification.needs_returning:
        return sql
    # A trailing semicolon would leave the clause outside the statement, and a
    # trailing -- comment would swallow it unless it starts a new line
    return f"{sql.rstrip().rstrip(';').rstrip()}\nRETURNING {id_column}"
