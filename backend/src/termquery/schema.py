"""Field schema for term records.

The schema maps each external field name to a descriptor whose ``title`` is
a dotted Salesforce path such as ``Term__c.Owner.Name``. The first segment
is the root object; the rest locate the field both in SOQL and in the
nested records the query returns.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from dataclasses import field
from functools import lru_cache
from pathlib import Path
from typing import Any
from typing import Iterator
from typing import Mapping
from typing import Optional

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import ValidationError as PydanticValidationError

from termquery.exceptions import SchemaError
from termquery.utils.logging import get_logger

logger = get_logger(__name__)

ROOT_ENTITY = "Term__c"
STRING_TYPE = "string"
SCHEMA_PATH_ENV_VAR = "TERM_SCHEMA_PATH"
DEFAULT_SCHEMA_PATH = Path(__file__).resolve().parent / "schemas" / "term.json"


def _split_title(title: str) -> list[str]:
    segments = title.split(".")
    if len(segments) < 2 or any(not segment for segment in segments):
        raise SchemaError(
            f"Field title must have a root and at least one field segment: {title!r}"
        )
    return segments


def relation_path(title: str) -> str:
    """Return the SOQL field reference for a descriptor title.

    ``"Term__c.Owner.Name"`` becomes ``"Owner.Name"``.
    """
    return ".".join(_split_title(title)[1:])


def traversal_path(title: str) -> tuple[str, ...]:
    """Return the keys used to walk a nested record for a descriptor title.

    ``"Term__c.Owner.Name"`` becomes ``("Owner", "Name")``.
    """
    return tuple(_split_title(title)[1:])


@dataclass(frozen=True)
class FieldDescriptor:
    """A single schema property."""

    name: str
    title: str
    type: Optional[str] = None
    relation_path: str = field(init=False, repr=False, compare=False)
    traversal_path: tuple[str, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        try:
            path = traversal_path(self.title)
        except SchemaError as exc:
            raise SchemaError(exc.message, field=self.name) from exc
        object.__setattr__(self, "traversal_path", path)
        object.__setattr__(self, "relation_path", ".".join(path))

    @property
    def root(self) -> str:
        return self.title.split(".", 1)[0]

    @property
    def is_string(self) -> bool:
        return self.type == STRING_TYPE


class TermSchema:
    """Immutable, ordered collection of field descriptors."""

    def __init__(self, descriptors: tuple[FieldDescriptor, ...]) -> None:
        self._descriptors = tuple(descriptors)
        self._by_name = {descriptor.name: descriptor for descriptor in self._descriptors}
        if len(self._by_name) != len(self._descriptors):
            raise SchemaError("Field names must be unique")

    def __iter__(self) -> Iterator[FieldDescriptor]:
        return iter(self._descriptors)

    def __len__(self) -> int:
        return len(self._descriptors)

    def get(self, name: str) -> Optional[FieldDescriptor]:
        """Return the descriptor for an external field name, if known."""
        return self._by_name.get(name)

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(descriptor.name for descriptor in self._descriptors)

    def __repr__(self) -> str:
        return f"TermSchema({list(self.names)!r})"


class PropertyDocument(BaseModel):
    """A property entry in the schema document."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    title: str
    type: Optional[str] = None


class SchemaDocument(BaseModel):
    """Top-level schema document (OpenAPI object schema)."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    properties: dict[str, PropertyDocument]


def parse_schema(
    document: Mapping[str, Any],
    root_entity: Optional[str] = ROOT_ENTITY,
) -> TermSchema:
    """Build a TermSchema from a decoded schema document.

    Args:
        document: Mapping with a ``properties`` object.
        root_entity: Expected first segment of every title. Pass None to
            accept any root.

    Raises:
        SchemaError: If the document declares no fields or any title is
            malformed.
    """
    try:
        parsed = SchemaDocument.model_validate(document)
    except PydanticValidationError as exc:
        raise SchemaError(f"Invalid schema document: {exc.errors()[0]['msg']}") from exc

    if not parsed.properties:
        raise SchemaError("Schema must declare at least one field")

    descriptors = []
    for name, prop in parsed.properties.items():
        descriptor = FieldDescriptor(name=name, title=prop.title, type=prop.type)
        if root_entity is not None and descriptor.root != root_entity:
            raise SchemaError(
                f"Field title must start with {root_entity}: {prop.title!r}",
                field=name,
            )
        descriptors.append(descriptor)

    return TermSchema(tuple(descriptors))


def load_schema(
    path: Path | str,
    root_entity: Optional[str] = ROOT_ENTITY,
) -> TermSchema:
    """Load and validate a schema document from a JSON file."""
    schema_path = Path(path)
    try:
        document = json.loads(schema_path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        raise SchemaError(f"Unable to read schema document {schema_path}: {exc}") from exc

    if not isinstance(document, dict):
        raise SchemaError(f"Schema document must be a JSON object: {schema_path}")

    schema = parse_schema(document, root_entity=root_entity)
    logger.info(f"Loaded term schema with {len(schema)} fields from {schema_path.name}")
    return schema


@lru_cache(maxsize=1)
def get_term_schema() -> TermSchema:
    """Return the process-wide term schema, loading it on first use."""
    path = os.getenv(SCHEMA_PATH_ENV_VAR) or DEFAULT_SCHEMA_PATH
    return load_schema(path)
