"""Flatten nested query records into schema-shaped rows."""

from __future__ import annotations

from typing import Any
from typing import Iterable
from typing import Mapping
from typing import Optional
from typing import Sequence

from termquery.schema import TermSchema


def resolve_path(record: Any, path: Sequence[str]) -> Optional[Any]:
    """Walk ``record`` along ``path`` and return the value reached.

    Returns None as soon as a segment cannot be followed: the cursor is
    None, is not a mapping, or lacks the key.
    """

    cursor = record
    for segment in path:
        if not isinstance(cursor, Mapping) or segment not in cursor:
            return None
        cursor = cursor[segment]
    return cursor


def project_record(schema: TermSchema, record: Any) -> dict[str, Any]:
    """Return one flat row with a key for every schema field."""

    return {
        descriptor.name: resolve_path(record, descriptor.traversal_path)
        for descriptor in schema
    }


def project_records(
    schema: TermSchema,
    records: Iterable[Any],
) -> list[dict[str, Any]]:
    """Project every record, preserving input order."""

    return [project_record(schema, record) for record in records]
