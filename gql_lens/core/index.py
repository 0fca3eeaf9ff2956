"""Name-keyed type index over a full or compressed schema.

``build_index`` validates the document once and returns a ``TypeIndex``; all
lookups afterwards are pure reads over the caller's schema dicts. Both schema
forms share the same algorithms. They differ only in how a field's ``type``
is unwrapped (nested reference vs. compact string) and in pattern support,
which exists only for the compressed form.

Relationships link a field to an OBJECT type. Scalar, enum, interface and
union targets are not reported in either direction.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from .errors import (
    FieldNotFoundError,
    InvalidSchemaError,
    PatternNotFoundError,
    TypeNotFoundError,
    UnsupportedLookupError,
)
from .ir import TypeKind, concrete_type_name
from .requests import DEFAULT_SEARCH_LIMIT
from .shapes import validate_compressed_schema, validate_full_schema

NAME_WEIGHT = 0.5
DESCRIPTION_WEIGHT = 0.3
MAX_RELEVANCE = 1.0


class SchemaForm(str, Enum):
    FULL = "full"
    COMPRESSED = "compressed"


class LookupResponseModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class RelationshipsLookupResponse(LookupResponseModel):
    # field name -> related type name
    outgoing: dict[str, str]
    # "OtherType.field" -> OtherType
    incoming: dict[str, str]


class SearchResult(LookupResponseModel):
    path: str
    type: str
    description: str | None = None
    relevance: float


class SearchLookupResponse(LookupResponseModel):
    results: list[SearchResult]
    related_types: list[str]


class PatternLookupResponse(LookupResponseModel):
    kind: str
    fields: list[dict[str, Any]]


class TypeIndex:
    """Common lookup operations over a mapping of type name to definition."""

    form: SchemaForm

    def __init__(
        self,
        types: dict[str, dict[str, Any]],
        patterns: dict[str, dict[str, Any]] | None = None,
        root_types: dict[str, str] | None = None,
    ):
        self.types = types
        self.patterns = patterns or {}
        self.root_types = root_types or {}

    def __len__(self) -> int:
        return len(self.types)

    def __contains__(self, type_id: str) -> bool:
        return type_id in self.types

    @property
    def supports_patterns(self) -> bool:
        return False

    def kind_of(self, type_id: str) -> str | None:
        type_def = self.types.get(type_id)
        return type_def.get("kind") if type_def else None

    def field_type_name(self, field: dict[str, Any]) -> str:
        """Concrete (unwrapped) type name of a field."""
        return concrete_type_name(field.get("type"))

    def get_type(self, type_id: str) -> dict[str, Any]:
        type_def = self.types.get(type_id)
        if type_def is None:
            raise TypeNotFoundError(type_id)
        return type_def

    def get_field(self, type_id: str, field_id: str) -> dict[str, Any]:
        type_def = self.get_type(type_id)
        for field in type_def.get("fields") or []:
            if field.get("name") == field_id:
                return field
        raise FieldNotFoundError(type_id, field_id)

    def relationships(self, type_id: str) -> RelationshipsLookupResponse:
        """Outgoing OBJECT links and incoming field references for a type.

        Scans every field in the schema, so cost grows with schema size.
        """
        type_def = self.get_type(type_id)

        outgoing: dict[str, str] = {}
        for field in type_def.get("fields") or []:
            target = self.field_type_name(field)
            if self.kind_of(target) == TypeKind.OBJECT.value:
                outgoing[field["name"]] = target

        incoming: dict[str, str] = {}
        for other_id, other in self.types.items():
            if other_id == type_id:
                continue
            for field in other.get("fields") or []:
                if self.field_type_name(field) == type_id:
                    incoming[f"{other_id}.{field['name']}"] = other_id

        return RelationshipsLookupResponse(outgoing=outgoing, incoming=incoming)

    def search(self, query: str, limit: int = DEFAULT_SEARCH_LIMIT) -> SearchLookupResponse:
        """Score type and field names/descriptions against the query terms.

        Each term adds 0.5 when found in a name and 0.3 when found in a
        description, capped at 1.0. Results are ordered by relevance, ties in
        schema order, and truncated to ``limit``.
        """
        terms = query.lower().split()
        if not terms:
            return SearchLookupResponse(results=[], related_types=[])

        hits: list[tuple[SearchResult, tuple[str, ...]]] = []
        for type_id, type_def in self.types.items():
            if type_id.startswith("__"):
                continue

            relevance = _relevance(terms, type_id, type_def.get("description"))
            if relevance > 0:
                result = SearchResult(
                    path=type_id,
                    type=type_def.get("kind") or "",
                    description=type_def.get("description"),
                    relevance=relevance,
                )
                hits.append((result, (type_id,)))

            if type_def.get("kind") != TypeKind.OBJECT.value:
                continue
            for field in type_def.get("fields") or []:
                relevance = _relevance(terms, field["name"], field.get("description"))
                if relevance > 0:
                    field_type = self.field_type_name(field)
                    result = SearchResult(
                        path=f"{type_id}.{field['name']}",
                        type=field_type,
                        description=field.get("description"),
                        relevance=relevance,
                    )
                    hits.append((result, (type_id, field_type)))

        hits.sort(key=lambda hit: hit[0].relevance, reverse=True)
        top = hits[:limit]

        related: dict[str, None] = {}
        for _, touched in top:
            for name in touched:
                if name in self.types:
                    related[name] = None

        return SearchLookupResponse(
            results=[result for result, _ in top],
            related_types=list(related),
        )

    def expand_pattern(self, pattern_name: str, params: dict[str, str]) -> PatternLookupResponse:
        raise UnsupportedLookupError(
            "pattern",
            f"Pattern lookup is not supported on {self.form.value} schema"
            " - use compressed schema for patterns",
        )


class FullTypeIndex(TypeIndex):
    """Index over an introspection envelope (``{"__schema": {...}}``)."""

    form = SchemaForm.FULL

    @classmethod
    def from_schema(cls, schema: dict[str, Any]) -> "FullTypeIndex":
        validate_full_schema(schema)
        schema_data = schema["__schema"]
        types = {t["name"]: t for t in schema_data["types"] if t.get("name")}
        root_types = {
            root: schema_data[root]["name"]
            for root in ("queryType", "mutationType", "subscriptionType")
            if schema_data.get(root)
        }
        return cls(types, root_types=root_types)


class CompressedTypeIndex(TypeIndex):
    """Index over a compressed schema document."""

    form = SchemaForm.COMPRESSED

    @classmethod
    def from_schema(cls, schema: dict[str, Any]) -> "CompressedTypeIndex":
        validate_compressed_schema(schema)
        root_types = {
            root: schema[root]
            for root in ("queryType", "mutationType", "subscriptionType")
            if schema.get(root)
        }
        return cls(dict(schema["types"]), patterns=schema.get("_patterns"), root_types=root_types)

    @property
    def supports_patterns(self) -> bool:
        return True

    def expand_pattern(self, pattern_name: str, params: dict[str, str]) -> PatternLookupResponse:
        """Fill ``{param}`` placeholders in a pattern's field types."""
        pattern = self.patterns.get(pattern_name)
        if pattern is None:
            raise PatternNotFoundError(pattern_name)

        fields = []
        for field in pattern.get("fields") or []:
            field_type = field["type"]
            for key, value in params.items():
                field_type = field_type.replace(f"{{{key}}}", value)
            expanded = {"name": field["name"], "type": field_type}
            if field.get("description"):
                expanded["description"] = field["description"]
            fields.append(expanded)

        return PatternLookupResponse(kind=pattern.get("kind") or TypeKind.OBJECT.value, fields=fields)


def detect_form(schema: Any) -> SchemaForm:
    """Tell the full form from the compressed form by its root.

    Raises:
        InvalidSchemaError: If neither root is present.
    """
    if isinstance(schema, dict):
        if "__schema" in schema:
            return SchemaForm.FULL
        if isinstance(schema.get("types"), dict):
            return SchemaForm.COMPRESSED
    raise InvalidSchemaError("Invalid schema: missing schema root")


def build_index(schema: Any, form: SchemaForm | str | None = None) -> TypeIndex:
    """Validate a schema document once and index its types by name.

    Args:
        schema: A full introspection envelope or a compressed document
        form: Force the form instead of detecting it

    Raises:
        InvalidSchemaError: If the root is missing.
        SchemaValidationError: If the document does not match its form.
    """
    form = SchemaForm(form) if form is not None else detect_form(schema)
    if form is SchemaForm.FULL:
        return FullTypeIndex.from_schema(schema)
    return CompressedTypeIndex.from_schema(schema)


def _relevance(terms: list[str], name: str, description: str | None) -> float:
    name = name.lower()
    description = (description or "").lower()
    score = 0.0
    for term in terms:
        if term in name:
            score += NAME_WEIGHT
        if description and term in description:
            score += DESCRIPTION_WEIGHT
    return round(min(score, MAX_RELEVANCE), 4)
