"""SOQL builders for term queries."""

from __future__ import annotations

from typing import Mapping

from termquery.schema import FieldDescriptor
from termquery.schema import ROOT_ENTITY
from termquery.schema import TermSchema


def build_select_list(schema: TermSchema) -> str:
    """Return every schema field as a comma-separated SOQL projection."""

    return ", ".join(descriptor.relation_path for descriptor in schema)


def format_literal(descriptor: FieldDescriptor, raw_value: str) -> str:
    """Render a filter value for the right-hand side of a predicate.

    String fields are single-quoted with embedded quotes backslash-escaped.
    Other types are inserted as given and are not validated.
    """

    if descriptor.is_string:
        escaped = raw_value.replace("'", "\\'")
        return f"'{escaped}'"
    return raw_value


def build_where_clause(schema: TermSchema, params: Mapping[str, str]) -> str:
    """Build the WHERE clause for known filter parameters.

    Clauses follow the iteration order of ``params``. Returns an empty
    string when no parameter matches a schema field.
    """

    clauses: list[str] = []
    for name, raw_value in params.items():
        descriptor = schema.get(name)
        if descriptor is None:
            continue
        clauses.append(
            f"{descriptor.relation_path} = {format_literal(descriptor, raw_value)}"
        )

    if not clauses:
        return ""
    return " WHERE " + " AND ".join(clauses)


def build_query(
    schema: TermSchema,
    params: Mapping[str, str],
    root_entity: str = ROOT_ENTITY,
) -> str:
    """Build the SOQL query for a term search."""

    return (
        f"SELECT {build_select_list(schema)}"
        f" FROM {root_entity}"
        f"{build_where_clause(schema, params)}"
    )
