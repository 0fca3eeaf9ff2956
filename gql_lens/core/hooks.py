"""Compression hooks for customizing schema compression.

Provides protocols for pre- and post-compression hooks that can filter the
raw introspection types before compaction or amend the compressed document
afterwards.

Example usage:
    from gql_lens.core.hooks import FilterTypesHook, HookRunner

    runner = HookRunner()
    # Drop introspection meta-types (__Schema, __Type, ...)
    runner.add_pre_hook(FilterTypesHook(exclude_prefix="__"))

    compressed = SchemaCompressor(hooks=runner).compress(schema)
"""

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class PreCompressHook(Protocol):
    """Protocol for pre-compression hooks.

    Pre-compression hooks receive the raw introspection type dicts and return
    the list that should actually be compressed.

    Example:
        class DropConnections:
            def pre_compress(self, types):
                return [t for t in types if not t["name"].endswith("Connection")]
    """

    def pre_compress(self, types: list[dict[str, Any]]) -> list[dict[str, Any]]:
        """Called before any type is compacted.

        Args:
            types: Raw introspection type dicts, in source order

        Returns:
            The (possibly filtered) list to compress
        """
        ...


@runtime_checkable
class PostCompressHook(Protocol):
    """Protocol for post-compression hooks.

    Post-compression hooks receive the finished compressed document and may
    return an amended copy.
    """

    def post_compress(self, compressed: dict[str, Any]) -> dict[str, Any]:
        """Called once the compressed document is complete.

        Args:
            compressed: The compressed schema document

        Returns:
            The (possibly amended) document
        """
        ...


class FilterTypesHook:
    """Built-in hook to filter types by name prefix/suffix.

    Example:
        # Remove introspection meta-types
        hook = FilterTypesHook(exclude_prefix="__")
    """

    def __init__(
        self,
        exclude_prefix: str | None = None,
        exclude_suffix: str | None = None,
        include_prefix: str | None = None,
        include_suffix: str | None = None,
    ):
        self.exclude_prefix = exclude_prefix
        self.exclude_suffix = exclude_suffix
        self.include_prefix = include_prefix
        self.include_suffix = include_suffix

    def _should_include(self, name: str) -> bool:
        """Check if a type should be included."""
        if self.exclude_prefix and name.startswith(self.exclude_prefix):
            return False
        if self.exclude_suffix and name.endswith(self.exclude_suffix):
            return False
        if self.include_prefix and not name.startswith(self.include_prefix):
            return False
        if self.include_suffix and not name.endswith(self.include_suffix):
            return False
        return True

    def pre_compress(self, types: list[dict[str, Any]]) -> list[dict[str, Any]]:
        """Filter raw types by name; nameless entries pass through."""
        return [t for t in types if not t.get("name") or self._should_include(t["name"])]


class AttachPatternsHook:
    """Built-in hook that attaches reusable field-shape patterns.

    Patterns are stored under ``_patterns`` and served by pattern lookups
    against the compressed schema.

    Example:
        hook = AttachPatternsHook({
            "connection": {
                "fields": [
                    {"name": "info", "type": "Info"},
                    {"name": "results", "type": "[{item}]"},
                ],
            },
        })
    """

    def __init__(self, patterns: dict[str, dict[str, Any]]):
        self.patterns = patterns

    def post_compress(self, compressed: dict[str, Any]) -> dict[str, Any]:
        if not self.patterns:
            return compressed
        merged = {**compressed.get("_patterns", {}), **self.patterns}
        return {**compressed, "_patterns": merged}


class HookRunner:
    """Runs a collection of hooks in order."""

    def __init__(self):
        self.pre_hooks: list[PreCompressHook] = []
        self.post_hooks: list[PostCompressHook] = []

    def add_pre_hook(self, hook: PreCompressHook):
        """Add a pre-compression hook."""
        self.pre_hooks.append(hook)

    def add_post_hook(self, hook: PostCompressHook):
        """Add a post-compression hook."""
        self.post_hooks.append(hook)

    def run_pre_hooks(self, types: list[dict[str, Any]]) -> list[dict[str, Any]]:
        """Run all pre-compression hooks in order."""
        for hook in self.pre_hooks:
            types = hook.pre_compress(types)
        return types

    def run_post_hooks(self, compressed: dict[str, Any]) -> dict[str, Any]:
        """Run all post-compression hooks in order."""
        for hook in self.post_hooks:
            compressed = hook.post_compress(compressed)
        return compressed
