"""Validate generated GraphQL queries against an introspected schema.

The report sorts graphql-core's validation messages into the categories a
retry prompt cares about (unknown fields, arguments, types, filter inputs)
and pulls the "Did you mean" suggestions out of the field errors.
"""

import re
from dataclasses import dataclass, field
from typing import Any

from graphql import GraphQLError, GraphQLSchema, build_client_schema, parse, validate

from .errors import InvalidSchemaError

_SUGGESTION = re.compile(r"Did you mean (.+)\?")
_QUOTED = re.compile(r"[\"']([^\"']+)[\"']")


@dataclass
class ValidationReport:
    is_valid: bool
    errors: list[str] = field(default_factory=list)
    field_errors: list[str] = field(default_factory=list)
    argument_errors: list[str] = field(default_factory=list)
    type_errors: list[str] = field(default_factory=list)
    filter_errors: list[str] = field(default_factory=list)
    field_suggestions: list[str] = field(default_factory=list)

    @classmethod
    def from_messages(cls, messages: list[str]) -> "ValidationReport":
        field_errors = [m for m in messages if "Cannot query field" in m or "Did you mean" in m]
        suggestions: list[str] = []
        for message in field_errors:
            match = _SUGGESTION.search(message)
            if match:
                for name in _QUOTED.findall(match.group(1)):
                    if name not in suggestions:
                        suggestions.append(name)

        return cls(
            is_valid=not messages,
            errors=list(messages),
            field_errors=field_errors,
            argument_errors=[m for m in messages if "argument" in m],
            type_errors=[m for m in messages if "type" in m and "field" not in m],
            filter_errors=[m for m in messages if "filter" in m or "input" in m],
            field_suggestions=suggestions,
        )


class QueryValidator:
    """Checks query documents against a client schema built from introspection."""

    def __init__(self, introspection: dict[str, Any]):
        """
        Args:
            introspection: ``{"__schema": {...}}``, as returned by
                ``GraphQLExecutor.introspect``

        Raises:
            InvalidSchemaError: If graphql-core cannot build a schema from it.
        """
        if not isinstance(introspection, dict) or "__schema" not in introspection:
            raise InvalidSchemaError("Invalid schema: missing __schema property")
        try:
            self.schema: GraphQLSchema = build_client_schema(introspection)
        except (TypeError, ValueError) as e:
            raise InvalidSchemaError(f"Invalid schema: {e}") from e

    def validate(self, query: str) -> ValidationReport:
        """Validate one query document. Syntax errors are reported, not raised."""
        try:
            document = parse(query)
        except GraphQLError as e:
            return ValidationReport.from_messages([e.message])
        return ValidationReport.from_messages([error.message for error in validate(self.schema, document)])
