"""Exceptions raised by schema compression and lookup.

Two families matter to callers:

* Structural errors (``InvalidSchemaError`` and subclasses) mean the schema
  document itself is unusable. They are raised immediately, by single and
  batch lookups alike.
* Lookup errors (``LookupFailedError`` and subclasses) end a single request.
  ``lookup()`` raises them; ``lookup_batch()`` records them and moves on.
"""


class GqlLensError(Exception):
    """Base class for all gql-lens errors."""


class InvalidSchemaError(GqlLensError):
    """The schema document is missing its root or has the wrong shape."""


class SchemaValidationError(InvalidSchemaError):
    """A schema failed shape validation.

    Attributes:
        path: Dotted path to the first offending element, e.g.
            ``__schema.types.3.kind``.
        details: One line per validation problem.
    """

    def __init__(self, message: str, path: str, details: list[str] | None = None):
        self.path = path
        self.details = details or []
        super().__init__(message)


class LookupFailedError(GqlLensError):
    """A single lookup request could not be answered."""


class TypeNotFoundError(LookupFailedError):
    def __init__(self, type_id: str):
        self.type_id = type_id
        super().__init__(f"Type not found: {type_id}")


class FieldNotFoundError(LookupFailedError):
    def __init__(self, type_id: str, field_id: str):
        self.type_id = type_id
        self.field_id = field_id
        super().__init__(f"Field not found: {field_id} on type {type_id}")


class PatternNotFoundError(LookupFailedError):
    def __init__(self, pattern_name: str):
        self.pattern_name = pattern_name
        super().__init__(f"Pattern not found: {pattern_name}")


class UnsupportedLookupError(LookupFailedError):
    """The lookup kind is not available for this schema form."""

    def __init__(self, lookup: str, message: str):
        self.lookup = lookup
        super().__init__(message)


class InvalidLookupRequestError(LookupFailedError):
    """A lookup request did not match any request shape."""


class UnknownLookupKindError(InvalidLookupRequestError):
    def __init__(self, kind: object):
        self.kind = kind
        super().__init__(f"Unsupported lookup type: {kind}")
