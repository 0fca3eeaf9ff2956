"""Core modules for GraphQL schema compression and lookup."""

from .auth import ApiKeyAuth, Auth, BearerAuth, HeaderAuth, NoAuth
from .compressor import CompressionOptions, SchemaCompressor, compress
from .context import ContextRenderer, render_context
from .errors import (
    FieldNotFoundError,
    GqlLensError,
    InvalidLookupRequestError,
    InvalidSchemaError,
    LookupFailedError,
    PatternNotFoundError,
    SchemaValidationError,
    TypeNotFoundError,
    UnknownLookupKindError,
    UnsupportedLookupError,
)
from .executor import GraphQLError, GraphQLExecutor
from .hooks import (
    AttachPatternsHook,
    FilterTypesHook,
    HookRunner,
    PostCompressHook,
    PreCompressHook,
)
from .index import (
    CompressedTypeIndex,
    FullTypeIndex,
    PatternLookupResponse,
    RelationshipsLookupResponse,
    SchemaForm,
    SearchLookupResponse,
    SearchResult,
    TypeIndex,
    build_index,
    detect_form,
)
from .ir import (
    ListTypeRef,
    NamedTypeRef,
    NonNullTypeRef,
    TypeKind,
    TypeRef,
    concrete_type_name,
    normalize_type_reference,
    type_ref_from_introspection,
    type_ref_from_string,
)
from .loader import SchemaNotFoundError, load_latest_schema, load_schema, parse_schema, save_snapshot
from .lookup import MergedLookupResponse, lookup, lookup_batch
from .requests import (
    FieldLookup,
    LookupRequest,
    PatternLookup,
    RelationshipsLookup,
    SearchLookup,
    TypeLookup,
    parse_lookup_request,
    parse_lookup_requests,
)
from .shapes import validate_compressed_schema, validate_full_schema
from .validator import QueryValidator, ValidationReport

__all__ = [
    # Auth
    "Auth",
    "ApiKeyAuth",
    "BearerAuth",
    "HeaderAuth",
    "NoAuth",
    # Errors
    "GqlLensError",
    "InvalidSchemaError",
    "SchemaValidationError",
    "LookupFailedError",
    "TypeNotFoundError",
    "FieldNotFoundError",
    "PatternNotFoundError",
    "UnsupportedLookupError",
    "InvalidLookupRequestError",
    "UnknownLookupKindError",
    # Type references
    "TypeKind",
    "TypeRef",
    "NamedTypeRef",
    "ListTypeRef",
    "NonNullTypeRef",
    "type_ref_from_introspection",
    "type_ref_from_string",
    "normalize_type_reference",
    "concrete_type_name",
    # Shapes
    "validate_full_schema",
    "validate_compressed_schema",
    # Compressor
    "CompressionOptions",
    "SchemaCompressor",
    "compress",
    # Hooks
    "PreCompressHook",
    "PostCompressHook",
    "FilterTypesHook",
    "AttachPatternsHook",
    "HookRunner",
    # Requests
    "LookupRequest",
    "TypeLookup",
    "FieldLookup",
    "RelationshipsLookup",
    "SearchLookup",
    "PatternLookup",
    "parse_lookup_request",
    "parse_lookup_requests",
    # Index
    "SchemaForm",
    "TypeIndex",
    "FullTypeIndex",
    "CompressedTypeIndex",
    "RelationshipsLookupResponse",
    "SearchResult",
    "SearchLookupResponse",
    "PatternLookupResponse",
    "build_index",
    "detect_form",
    # Lookup
    "MergedLookupResponse",
    "lookup",
    "lookup_batch",
    # Context
    "ContextRenderer",
    "render_context",
    # Loader
    "SchemaNotFoundError",
    "load_schema",
    "load_latest_schema",
    "parse_schema",
    "save_snapshot",
    # Executor
    "GraphQLError",
    "GraphQLExecutor",
    # Validator
    "QueryValidator",
    "ValidationReport",
]
