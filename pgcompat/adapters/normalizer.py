"""
Result normalization

Maps a native ExecutionResult onto the NormalizedResult contract:

    rows  -> native rows, [] when nothing came back
    meta  -> {"affected_rows": int}               for UPDATE / DELETE
             {"affected_rows": int, "insert_id": x} for INSERT
             {}                                    for everything else

insert_id is always present for an INSERT, None when no identifier was
returned. Callers check for the key, so it is never omitted.
"""

from typing import Any, Dict

from pgcompat.adapters.base import ExecutionResult, NormalizedResult
from pgcompat.adapters.classifier import Classification


def _affected_rows(row_count: Any) -> int:
    # bool is an int subclass but never a row count
    if isinstance(row_count, int) and not isinstance(row_count, bool):
        return row_count
    return 0


def normalize(
    result: ExecutionResult,
    classification: Classification,
    id_column: str = "id",
) -> NormalizedResult:
    rows = result.rows if result.rows is not None else []
    meta: Dict[str, Any] = {}

    if classification.is_mutation:
        meta["affected_rows"] = _affected_rows(result.row_count)

        if classification.is_insert:
            insert_id = None
            if rows:
                insert_id = rows[0].get(id_column)
            meta["insert_id"] = insert_id

    return NormalizedResult(rows=rows, meta=meta)
