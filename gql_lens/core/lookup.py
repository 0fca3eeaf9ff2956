"""Single and batched schema lookups.

``lookup`` answers one request and raises on failure. ``lookup_batch``
answers many, merging the answers into one ``MergedLookupResponse`` and
recording per-request failures instead of raising, so a planner can decide
whether partial context is good enough.

Example:
    index = build_index(schema)
    merged = lookup_batch(index, [
        {"lookup": "type", "id": "Query"},
        {"lookup": "field", "typeId": "Character", "fieldId": "episode"},
        {"lookup": "search", "query": "episode air date"},
    ])
    if merged.metadata.summary.has_partial_results:
        ...
"""

from typing import Any, Union

from pydantic import BaseModel

from .errors import LookupFailedError
from .index import (
    LookupResponseModel,
    PatternLookupResponse,
    RelationshipsLookupResponse,
    SearchLookupResponse,
    SearchResult,
    TypeIndex,
    build_index,
)
from .requests import (
    FieldLookup,
    LookupRequest,
    PatternLookup,
    RelationshipsLookup,
    SearchLookup,
    TypeLookup,
    parse_lookup_request,
    request_kind,
)

LookupResponse = Union[
    dict[str, Any],
    RelationshipsLookupResponse,
    SearchLookupResponse,
    PatternLookupResponse,
]


class RequestRecord(LookupResponseModel):
    """One entry of ``metadata.requestOrder``."""
    type: str
    id: str
    success: bool
    error: str | None = None


class LookupFailure(LookupResponseModel):
    request: Any
    error_message: str


class BatchSummary(LookupResponseModel):
    total: int
    successful: int
    failed: int
    has_partial_results: bool


class LookupMetadata(LookupResponseModel):
    request_order: list[RequestRecord]
    related_types: list[str]
    errors: list[LookupFailure]
    summary: BatchSummary


class MergedLookupResponse(LookupResponseModel):
    """Snapshot of everything a batch of lookups found.

    ``types`` is keyed by type name, ``fields`` by ``"Type.field"``,
    ``relationships`` by type name and ``patterns`` by pattern name.
    """
    types: dict[str, dict[str, Any]]
    fields: dict[str, dict[str, Any]]
    relationships: dict[str, RelationshipsLookupResponse]
    search_results: list[SearchResult]
    patterns: dict[str, PatternLookupResponse]
    metadata: LookupMetadata

    def to_json(self, indent: int | None = None) -> str:
        return self.model_dump_json(by_alias=True, exclude_none=True, indent=indent)


def lookup(index: TypeIndex | dict[str, Any], request: LookupRequest | dict[str, Any]) -> LookupResponse:
    """Answer one lookup request.

    Args:
        index: A built index, or a schema document to index first
        request: A request model or its raw dict form

    Returns:
        The type or field definition for ``type``/``field`` requests, or a
        response model for ``relationships``/``search``/``pattern``.

    Raises:
        LookupFailedError: TypeNotFoundError, FieldNotFoundError,
            PatternNotFoundError, UnsupportedLookupError or an invalid request.
        InvalidSchemaError: If a schema document was passed and is invalid.
    """
    index = _ensure_index(index)
    request = parse_lookup_request(request)

    if isinstance(request, TypeLookup):
        return index.get_type(request.id)
    if isinstance(request, FieldLookup):
        return index.get_field(request.type_id, request.field_id)
    if isinstance(request, RelationshipsLookup):
        return index.relationships(request.type_id)
    if isinstance(request, SearchLookup):
        return index.search(request.query, request.limit)
    return index.expand_pattern(request.pattern_name, request.params)


def lookup_batch(
    index: TypeIndex | dict[str, Any],
    requests: list[LookupRequest | dict[str, Any]],
) -> MergedLookupResponse:
    """Answer a list of requests in order, merging the results.

    A failing request is recorded in ``metadata.errors`` and
    ``metadata.requestOrder``; the remaining requests still run. Only an
    invalid schema document raises.
    """
    batch = _BatchAccumulator(_ensure_index(index))
    for request in requests:
        batch.apply(request)
    return batch.snapshot()


def _ensure_index(index: TypeIndex | dict[str, Any]) -> TypeIndex:
    if isinstance(index, TypeIndex):
        return index
    return build_index(index)


class _BatchAccumulator:
    """Mutable state for one ``lookup_batch`` call."""

    def __init__(self, index: TypeIndex):
        self.index = index
        self.types: dict[str, dict[str, Any]] = {}
        self.fields: dict[str, dict[str, Any]] = {}
        self.relationships: dict[str, RelationshipsLookupResponse] = {}
        self.search_results: list[SearchResult] = []
        self.patterns: dict[str, PatternLookupResponse] = {}
        self.request_order: list[RequestRecord] = []
        # Insertion-ordered set
        self.related_types: dict[str, None] = {}
        self.errors: list[LookupFailure] = []

    def apply(self, raw_request: LookupRequest | dict[str, Any]):
        # Unparseable requests are recorded with an empty id
        kind, request_id = request_kind(raw_request), ""
        try:
            request = parse_lookup_request(raw_request)
            kind, request_id = request.lookup, request.request_id
            self._dispatch(request)
        except LookupFailedError as e:
            payload = raw_request.to_dict() if isinstance(raw_request, BaseModel) else raw_request
            self.errors.append(LookupFailure(request=payload, error_message=str(e)))
            self.request_order.append(RequestRecord(type=kind, id=request_id, success=False, error=str(e)))
            return

        self.request_order.append(RequestRecord(type=kind, id=request_id, success=True))

    def _dispatch(self, request: LookupRequest):
        if isinstance(request, TypeLookup):
            self.types[request.id] = self.index.get_type(request.id)
            self._touch(request.id)

        elif isinstance(request, FieldLookup):
            field = self.index.get_field(request.type_id, request.field_id)
            self.fields[request.request_id] = field
            self._touch(request.type_id)
            self._pull_in(self.index.field_type_name(field))

        elif isinstance(request, RelationshipsLookup):
            related = self.index.relationships(request.type_id)
            self.relationships[request.type_id] = related
            self._touch(request.type_id)
            for type_id in [*related.outgoing.values(), *related.incoming.values()]:
                self._pull_in(type_id)

        elif isinstance(request, SearchLookup):
            found = self.index.search(request.query, request.limit)
            self.search_results.extend(found.results)
            for type_id in found.related_types:
                self._touch(type_id)

        elif isinstance(request, PatternLookup):
            self.patterns[request.pattern_name] = self.index.expand_pattern(
                request.pattern_name, request.params
            )

    def _touch(self, type_id: str):
        if type_id:
            self.related_types[type_id] = None

    def _pull_in(self, type_id: str):
        """Add a related type definition unless it is already present."""
        if not type_id or type_id in self.types or type_id not in self.index:
            return
        self.types[type_id] = self.index.get_type(type_id)
        self._touch(type_id)

    def snapshot(self) -> MergedLookupResponse:
        total = len(self.request_order)
        failed = len(self.errors)
        summary = BatchSummary(
            total=total,
            successful=total - failed,
            failed=failed,
            has_partial_results=0 < failed < total,
        )
        return MergedLookupResponse(
            types=self.types,
            fields=self.fields,
            relationships=self.relationships,
            search_results=self.search_results,
            patterns=self.patterns,
            metadata=LookupMetadata(
                request_order=self.request_order,
                related_types=list(self.related_types),
                errors=self.errors,
                summary=summary,
            ),
        )
