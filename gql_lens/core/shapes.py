"""Shape validation for the two schema forms.

The full form is the raw introspection envelope with nested type
references; the compressed form is the flat, string-typed document produced
by the compressor. Each gets its own pydantic model tree so a failure points
at the exact offending path for that form.

The models are used for validation only. Lookups serve the caller's original
dicts so responses keep every key the source document carried.
"""

from typing import Annotated, Any

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, ValidationError, model_validator

from .errors import SchemaValidationError
from .ir import TypeKind, type_ref_from_string


class _Shape(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


# =============================================================================
# Full (introspection) form
# =============================================================================


class TypeRefShape(_Shape):
    kind: TypeKind
    name: str | None = None
    of_type: "TypeRefShape | None" = Field(default=None, alias="ofType")

    @model_validator(mode="after")
    def _check_variant(self):
        if self.kind.is_wrapper:
            if self.of_type is None:
                raise ValueError(f"{self.kind.value} reference requires 'ofType'")
        elif not self.name:
            raise ValueError(f"{self.kind.value} reference requires a 'name'")
        return self


class InputValueShape(_Shape):
    name: str
    description: str | None = None
    type: TypeRefShape
    default_value: str | None = Field(default=None, alias="defaultValue")


class EnumValueShape(_Shape):
    name: str
    description: str | None = None
    is_deprecated: bool | None = Field(default=None, alias="isDeprecated")
    deprecation_reason: str | None = Field(default=None, alias="deprecationReason")


class FieldShape(_Shape):
    name: str
    description: str | None = None
    args: list[InputValueShape] | None = None
    type: TypeRefShape
    is_deprecated: bool | None = Field(default=None, alias="isDeprecated")
    deprecation_reason: str | None = Field(default=None, alias="deprecationReason")


class FullTypeShape(_Shape):
    kind: TypeKind
    # Nameless entries are tolerated here and skipped by the index
    name: str | None = None
    description: str | None = None
    fields: list[FieldShape] | None = None
    input_fields: list[InputValueShape] | None = Field(default=None, alias="inputFields")
    interfaces: list[TypeRefShape] | None = None
    enum_values: list[EnumValueShape] | None = Field(default=None, alias="enumValues")
    possible_types: list[TypeRefShape] | None = Field(default=None, alias="possibleTypes")

    @model_validator(mode="after")
    def _check_named_kind(self):
        if self.kind.is_wrapper:
            raise ValueError(f"schema types cannot have wrapper kind {self.kind.value}")
        return self


class RootTypeShape(_Shape):
    name: str


class FullSchemaShape(_Shape):
    types: list[FullTypeShape]
    query_type: RootTypeShape = Field(alias="queryType")
    mutation_type: RootTypeShape | None = Field(default=None, alias="mutationType")
    subscription_type: RootTypeShape | None = Field(default=None, alias="subscriptionType")
    directives: list[dict[str, Any]] | None = None


class FullSchemaDocument(_Shape):
    introspection: FullSchemaShape = Field(alias="__schema")


# =============================================================================
# Compressed form
# =============================================================================


def _check_type_string(value: str) -> str:
    type_ref_from_string(value)
    return value


TypeString = Annotated[str, AfterValidator(_check_type_string)]


class CompactArgShape(_Shape):
    name: str
    type: TypeString
    description: str | None = None
    default: Any = None


class CompactDirectiveUseShape(_Shape):
    name: str
    args: list[CompactArgShape] | None = None


class CompactFieldShape(_Shape):
    name: str
    type: TypeString
    description: str | None = None
    args: list[CompactArgShape] | None = None
    directives: list[CompactDirectiveUseShape] | None = None


class CompactTypeShape(_Shape):
    kind: TypeKind
    name: str
    description: str | None = None
    fields: list[CompactFieldShape] | None = None
    input_fields: list[CompactArgShape] | None = Field(default=None, alias="inputFields")
    enum_values: list[str] | None = Field(default=None, alias="enumValues")
    interfaces: list[str] | None = None
    possible_types: list[str] | None = Field(default=None, alias="possibleTypes")


class PatternFieldShape(_Shape):
    name: str
    # May hold {param} placeholders, so not parsed as a type reference
    type: str
    description: str | None = None


class PatternShape(_Shape):
    kind: str = TypeKind.OBJECT.value
    fields: list[PatternFieldShape]


class CompressedSchemaDocument(_Shape):
    query_type: str | None = Field(default=None, alias="queryType")
    mutation_type: str | None = Field(default=None, alias="mutationType")
    subscription_type: str | None = Field(default=None, alias="subscriptionType")
    types: dict[str, CompactTypeShape]
    directives: list[dict[str, Any]] | None = None
    patterns: dict[str, PatternShape] = Field(default_factory=dict, alias="_patterns")

    @model_validator(mode="after")
    def _check_type_keys(self):
        for key, type_def in self.types.items():
            if key != type_def.name:
                raise ValueError(f"type key {key!r} does not match type name {type_def.name!r}")
        return self


# =============================================================================
# Entry points
# =============================================================================


def validate_full_schema(document: Any) -> FullSchemaDocument:
    """Validate an introspection envelope (``{"__schema": {...}}``).

    Raises:
        SchemaValidationError: Naming the path of the first problem.
    """
    try:
        return FullSchemaDocument.model_validate(document)
    except ValidationError as e:
        raise _shape_error("full", e) from e


def validate_compressed_schema(document: Any) -> CompressedSchemaDocument:
    """Validate a compressed schema document.

    Raises:
        SchemaValidationError: Naming the path of the first problem.
    """
    try:
        return CompressedSchemaDocument.model_validate(document)
    except ValidationError as e:
        raise _shape_error("compressed", e) from e


def _format_loc(loc: tuple) -> str:
    return ".".join(str(part) for part in loc)


def _shape_error(form: str, error: ValidationError) -> SchemaValidationError:
    problems = error.errors()
    first = problems[0]
    path = _format_loc(first["loc"])
    details = [f"{_format_loc(p['loc']) or '<root>'}: {p['msg']}" for p in problems]
    return SchemaValidationError(
        f"Invalid {form} schema at {path or '<root>'}: {first['msg']}",
        path=path,
        details=details,
    )
