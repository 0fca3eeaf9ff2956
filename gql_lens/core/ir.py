"""Intermediate Representation (IR) for GraphQL type references.

Introspection results describe a field's type as a nested chain of
``{kind, name, ofType}`` objects; the compressed schema writes the same
information as a string such as ``[Episode]!``. Both are converted into the
small tagged variant defined here so the rest of the package can unwrap and
render references without caring which form they came from.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Union

from graphql import GraphQLSyntaxError, ListTypeNode, NamedTypeNode, NonNullTypeNode, TypeNode, parse_type


class TypeKind(str, Enum):
    """The ``kind`` values an introspection ``__Type`` can carry."""
    SCALAR = "SCALAR"
    OBJECT = "OBJECT"
    INTERFACE = "INTERFACE"
    UNION = "UNION"
    ENUM = "ENUM"
    INPUT_OBJECT = "INPUT_OBJECT"
    LIST = "LIST"
    NON_NULL = "NON_NULL"

    @property
    def is_wrapper(self) -> bool:
        return self in (TypeKind.LIST, TypeKind.NON_NULL)


WRAPPER_KINDS = frozenset({TypeKind.LIST.value, TypeKind.NON_NULL.value})


@dataclass(frozen=True)
class NamedTypeRef:
    """A reference to a named type (the leaf of a reference chain)."""
    name: str
    kind: str | None = None  # Unknown when parsed from a compact string

    def render(self) -> str:
        return self.name

    def concrete_name(self) -> str:
        return self.name


@dataclass(frozen=True)
class ListTypeRef:
    """``[inner]``"""
    of_type: "TypeRef"

    def render(self) -> str:
        return f"[{self.of_type.render()}]"

    def concrete_name(self) -> str:
        return unwrap(self).name


@dataclass(frozen=True)
class NonNullTypeRef:
    """``inner!``"""
    of_type: "TypeRef"

    def render(self) -> str:
        return f"{self.of_type.render()}!"

    def concrete_name(self) -> str:
        return unwrap(self).name


TypeRef = Union[NamedTypeRef, ListTypeRef, NonNullTypeRef]


def unwrap(ref: TypeRef) -> NamedTypeRef:
    """Strip every LIST/NON_NULL wrapper and return the named leaf."""
    while not isinstance(ref, NamedTypeRef):
        ref = ref.of_type
    return ref


def type_ref_from_introspection(data: dict[str, Any]) -> TypeRef:
    """Convert an introspection ``{kind, name, ofType}`` chain into a TypeRef.

    Raises:
        ValueError: If a wrapper has no ``ofType`` or a named kind has no name.
    """
    kind = data.get("kind")
    if kind in WRAPPER_KINDS:
        inner = data.get("ofType")
        if not inner:
            raise ValueError(f"{kind} type reference is missing 'ofType'")
        of_type = type_ref_from_introspection(inner)
        return ListTypeRef(of_type) if kind == TypeKind.LIST.value else NonNullTypeRef(of_type)

    name = data.get("name")
    if not name:
        raise ValueError(f"{kind} type reference is missing 'name'")
    return NamedTypeRef(name=name, kind=kind)


def type_ref_from_string(type_string: str) -> TypeRef:
    """Parse compact notation (``[Episode]!``) into a TypeRef.

    Raises:
        ValueError: If the string is not a valid GraphQL type reference.
    """
    try:
        node = parse_type(type_string)
    except GraphQLSyntaxError as e:
        raise ValueError(f"Invalid type reference {type_string!r}: {e.message}") from e
    return _from_type_node(node)


def _from_type_node(node: TypeNode) -> TypeRef:
    if isinstance(node, NonNullTypeNode):
        return NonNullTypeRef(_from_type_node(node.type))
    if isinstance(node, ListTypeNode):
        return ListTypeRef(_from_type_node(node.type))
    if isinstance(node, NamedTypeNode):
        return NamedTypeRef(name=node.name.value)
    raise TypeError(f"Unexpected type node: {type(node).__name__}")


def normalize_type_reference(data: dict[str, Any] | None) -> str:
    """Render an introspection type reference in compact notation.

    ``NON_NULL(LIST(OBJECT "Episode"))`` becomes ``"[Episode]!"``. Missing
    references and nameless leaves render as an empty string.
    """
    if not data:
        return ""
    kind = data.get("kind")
    if kind == TypeKind.NON_NULL.value:
        return f"{normalize_type_reference(data.get('ofType'))}!"
    if kind == TypeKind.LIST.value:
        return f"[{normalize_type_reference(data.get('ofType'))}]"
    return data.get("name") or ""


def concrete_type_name(type_value: dict[str, Any] | str | None) -> str:
    """Return the named type behind a field's ``type`` in either schema form.

    Accepts an introspection reference dict or a compact type string. Returns
    an empty string when the reference cannot be resolved.
    """
    if not type_value:
        return ""
    try:
        if isinstance(type_value, str):
            return type_ref_from_string(type_value).concrete_name()
        return type_ref_from_introspection(type_value).concrete_name()
    except ValueError:
        return ""


def type_string(type_value: dict[str, Any] | str | None) -> str:
    """Compact notation for a field's ``type`` in either schema form."""
    if isinstance(type_value, str):
        return type_value
    return normalize_type_reference(type_value)
