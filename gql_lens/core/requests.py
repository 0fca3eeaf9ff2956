"""Lookup request models.

Requests usually arrive as JSON produced by an LLM function call, so they are
parsed into a strict tagged union keyed on ``lookup`` before they reach the
index. Both the wire spelling (``typeId``) and the Python spelling
(``type_id``) are accepted.
"""

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from .errors import InvalidLookupRequestError, UnknownLookupKindError

DEFAULT_SEARCH_LIMIT = 5


class _Request(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


class TypeLookup(_Request):
    lookup: Literal["type"] = "type"
    id: str

    @property
    def request_id(self) -> str:
        return self.id


class FieldLookup(_Request):
    lookup: Literal["field"] = "field"
    type_id: str = Field(alias="typeId")
    field_id: str = Field(alias="fieldId")

    @property
    def request_id(self) -> str:
        return f"{self.type_id}.{self.field_id}"


class RelationshipsLookup(_Request):
    lookup: Literal["relationships"] = "relationships"
    type_id: str = Field(alias="typeId")

    @property
    def request_id(self) -> str:
        return self.type_id


class SearchLookup(_Request):
    lookup: Literal["search"] = "search"
    query: str
    limit: int = Field(default=DEFAULT_SEARCH_LIMIT, ge=0)

    @property
    def request_id(self) -> str:
        return self.query


class PatternLookup(_Request):
    lookup: Literal["pattern"] = "pattern"
    pattern_name: str = Field(alias="patternName")
    params: dict[str, str] = Field(default_factory=dict)

    @property
    def request_id(self) -> str:
        return self.pattern_name


LookupRequest = Annotated[
    Union[TypeLookup, FieldLookup, RelationshipsLookup, SearchLookup, PatternLookup],
    Field(discriminator="lookup"),
]

LOOKUP_KINDS = ("type", "field", "relationships", "search", "pattern")

_request_adapter: TypeAdapter = TypeAdapter(LookupRequest)


def parse_lookup_request(data: Any) -> LookupRequest:
    """Parse one request.

    Already-parsed request models are returned unchanged.

    Raises:
        UnknownLookupKindError: If ``lookup`` is not a known discriminant.
        InvalidLookupRequestError: If the request is otherwise malformed.
    """
    if isinstance(data, _Request):
        return data
    if isinstance(data, dict) and "lookup" in data and data["lookup"] not in LOOKUP_KINDS:
        raise UnknownLookupKindError(data["lookup"])
    try:
        return _request_adapter.validate_python(data)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or '<request>'}: {err['msg']}"
            for err in e.errors()
        )
        raise InvalidLookupRequestError(f"Invalid lookup request: {problems}") from e


def parse_lookup_requests(data: Any) -> list[LookupRequest]:
    """Parse a list of requests, or a ``{"requests": [...]}`` wrapper.

    Raises on the first invalid request; use ``lookup_batch`` with raw dicts
    to record invalid requests as per-request failures instead.
    """
    if isinstance(data, dict) and "requests" in data:
        data = data["requests"]
    if not isinstance(data, list):
        raise InvalidLookupRequestError("Lookup requests must be a list")
    return [parse_lookup_request(item) for item in data]


def request_kind(data: Any) -> str:
    """Best-effort ``lookup`` kind for a parsed or raw request."""
    if isinstance(data, _Request):
        return data.lookup
    if isinstance(data, dict):
        return str(data.get("lookup", ""))
    return ""
