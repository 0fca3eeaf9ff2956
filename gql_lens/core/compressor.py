"""Schema compressor for GraphQL introspection results.

Turns the deeply nested ``{"__schema": {...}}`` introspection document into a
compact, name-keyed catalog suitable for embedding in a token-limited prompt:

1. Descriptions are kept or dropped per ``CompressionOptions``.
2. Deprecated types, fields and enum values are pruned when requested.
3. Type references become compact strings (``[Episode]!``).
4. Null values and empty lists are removed at every level.

The output is a lossy projection for display and lookup, not a serialization
format; it cannot be turned back into an introspection result.

Example:
    compressed = compress(introspection, CompressionOptions(remove_descriptions=True))
    compressed["types"]["Character"]["fields"][0]
    # {"name": "id", "type": "ID!"}
"""

from dataclasses import dataclass
from typing import Any

from .errors import InvalidSchemaError
from .hooks import HookRunner
from .ir import TypeKind, normalize_type_reference


@dataclass
class CompressionOptions:
    """Knobs for ``SchemaCompressor``.

    Attributes:
        remove_descriptions: Strip descriptions from types, fields, arguments
            and directives.
        preserve_essential_descriptions: With ``remove_descriptions``, still
            keep the description of OBJECT types (but not of their fields).
        remove_deprecated: Drop deprecated types, fields and enum values.
    """
    remove_descriptions: bool = False
    preserve_essential_descriptions: bool = True
    remove_deprecated: bool = True


class SchemaCompressor:
    """Compresses introspection documents into the compact schema form."""

    def __init__(
        self,
        options: CompressionOptions | None = None,
        hooks: HookRunner | None = None,
    ):
        self.options = options or CompressionOptions()
        self.hooks = hooks or HookRunner()

    def compress(self, schema: dict[str, Any]) -> dict[str, Any]:
        """Compress a full introspection document.

        ``__schema.types`` may be a list of type objects or a mapping of type
        name to type object. The result always keys types by name.

        Raises:
            InvalidSchemaError: If ``__schema`` or its ``types`` is missing.
        """
        if not isinstance(schema, dict) or not schema.get("__schema"):
            raise InvalidSchemaError("Invalid schema: missing __schema property")

        schema_data = schema["__schema"]
        raw_types = schema_data.get("types")
        if raw_types is None:
            raise InvalidSchemaError("Invalid schema: missing __schema.types")
        if isinstance(raw_types, dict):
            raw_types = list(raw_types.values())
        elif not isinstance(raw_types, list):
            raise InvalidSchemaError("Invalid schema: __schema.types must be a list or a mapping")

        types: dict[str, Any] = {}
        for type_def in self.hooks.run_pre_hooks(raw_types):
            compressed_type = self.compress_type(type_def)
            if compressed_type is not None:
                types[compressed_type["name"]] = compressed_type

        compressed: dict[str, Any] = {}
        for root in ("queryType", "mutationType", "subscriptionType"):
            root_ref = schema_data.get(root)
            if root_ref and root_ref.get("name"):
                compressed[root] = root_ref["name"]
        compressed["types"] = types

        directives = [self.compress_directive(d) for d in schema_data.get("directives") or [] if d]
        if directives:
            compressed["directives"] = directives

        return self.hooks.run_post_hooks(_prune(compressed))

    def compress_type(self, type_def: dict[str, Any]) -> dict[str, Any] | None:
        """Compress one named type; returns None when the type is dropped."""
        if not type_def or not type_def.get("name"):
            return None
        if self.options.remove_deprecated and type_def.get("isDeprecated"):
            return None

        compressed: dict[str, Any] = {"kind": type_def.get("kind"), "name": type_def["name"]}
        if self._keep_type_description(type_def) and type_def.get("description"):
            compressed["description"] = type_def["description"]

        compressed["fields"] = [
            self.compress_field(f)
            for f in type_def.get("fields") or []
            if not self._is_pruned(f)
        ]
        compressed["inputFields"] = [
            self.compress_input_value(v)
            for v in type_def.get("inputFields") or []
            if not self._is_pruned(v)
        ]
        compressed["enumValues"] = [
            v["name"] for v in type_def.get("enumValues") or [] if not self._is_pruned(v)
        ]
        compressed["interfaces"] = [
            normalize_type_reference(i) for i in type_def.get("interfaces") or []
        ]
        compressed["possibleTypes"] = [
            normalize_type_reference(p) for p in type_def.get("possibleTypes") or []
        ]
        compressed["directives"] = [
            self.compress_directive_use(d) for d in type_def.get("directives") or []
        ]
        return _prune(compressed)

    def compress_field(self, field: dict[str, Any]) -> dict[str, Any]:
        compressed: dict[str, Any] = {"name": field["name"]}
        if self._keep_member_description() and field.get("description"):
            compressed["description"] = field["description"]
        compressed["type"] = normalize_type_reference(field.get("type"))
        compressed["args"] = [self.compress_input_value(a) for a in field.get("args") or []]
        compressed["directives"] = [
            self.compress_directive_use(d) for d in field.get("directives") or []
        ]
        return compressed

    def compress_input_value(self, value: dict[str, Any]) -> dict[str, Any]:
        """Compress an argument, input field or directive argument to ``{name, type, description?, default?}``."""
        compressed: dict[str, Any] = {"name": value["name"]}
        compressed["type"] = normalize_type_reference(value.get("type"))
        if self._keep_member_description() and value.get("description"):
            compressed["description"] = value["description"]
        if value.get("defaultValue") not in (None, ""):
            compressed["default"] = value["defaultValue"]
        return compressed

    def compress_directive_use(self, directive: dict[str, Any]) -> dict[str, Any]:
        """Compress a directive applied to a type or field."""
        args = directive.get("args") or []
        return {
            "name": directive["name"],
            "args": [self.compress_input_value(a) for a in args] or None,
        }

    def compress_directive(self, directive: dict[str, Any]) -> dict[str, Any]:
        """Compress a schema-level directive definition."""
        compressed: dict[str, Any] = {"name": directive["name"]}
        if self._keep_member_description() and directive.get("description"):
            compressed["description"] = directive["description"]
        compressed["args"] = [self.compress_input_value(a) for a in directive.get("args") or []]
        compressed["locations"] = list(directive.get("locations") or [])
        return compressed

    def _keep_type_description(self, type_def: dict[str, Any]) -> bool:
        if not self.options.remove_descriptions:
            return True
        return (
            self.options.preserve_essential_descriptions
            and type_def.get("kind") == TypeKind.OBJECT.value
        )

    def _keep_member_description(self) -> bool:
        return not self.options.remove_descriptions

    def _is_pruned(self, member: dict[str, Any]) -> bool:
        return bool(self.options.remove_deprecated and member.get("isDeprecated"))


def compress(
    schema: dict[str, Any],
    options: CompressionOptions | None = None,
    hooks: HookRunner | None = None,
) -> dict[str, Any]:
    """Compress an introspection document with the given options."""
    return SchemaCompressor(options, hooks).compress(schema)


def _prune(value: Any) -> Any:
    """Drop keys holding None or an empty list, recursively."""
    if isinstance(value, dict):
        pruned = {}
        for key, item in value.items():
            item = _prune(item)
            if item is None or (isinstance(item, list) and not item):
                continue
            pruned[key] = item
        return pruned
    if isinstance(value, list):
        return [_prune(item) for item in value]
    return value
