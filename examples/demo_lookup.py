#!/usr/bin/env python3
"""Demonstration of schema compression and batched lookups.

This script shows how to:
1. Build an introspection result from SDL
2. Compress it for prompt use
3. Run a batch of lookups and render them as prompt context

Note: This demo doesn't make real API calls - the schema is built locally.
"""

import json

from graphql import build_schema, introspection_from_schema

from gql_lens.core import (
    AttachPatternsHook,
    CompressionOptions,
    FilterTypesHook,
    HookRunner,
    SchemaCompressor,
    build_index,
    lookup_batch,
    render_context,
)

SDL = '''
"""A character from the show"""
type Character {
  id: ID!
  name: String
  "Episodes in which this character appeared"
  episode: [Episode]!
}

type Episode {
  id: ID!
  name: String
  air_date: String
  characters: [Character]!
}

type Characters {
  results: [Character]
}

type Query {
  character(id: ID!): Character
  characters(page: Int = 1): Characters
  episode(id: ID!): Episode
}
'''


def main():
    print("=== Schema Lookup Demo ===\n")

    print("1. Building introspection result...")
    introspection = {"__schema": introspection_from_schema(build_schema(SDL))["__schema"]}
    original_size = len(json.dumps(introspection))
    print(f"   {len(introspection['__schema']['types'])} types, {original_size} characters")

    print("\n2. Compressing...")
    hooks = HookRunner()
    hooks.add_pre_hook(FilterTypesHook(exclude_prefix="__"))
    hooks.add_post_hook(AttachPatternsHook({
        "paginated": {"fields": [{"name": "results", "type": "[{item}]"}]},
    }))
    compressor = SchemaCompressor(CompressionOptions(remove_descriptions=True), hooks)
    compressed = compressor.compress(introspection)
    print(f"   {len(compressed['types'])} types, {len(json.dumps(compressed))} characters")

    print("\n3. Looking up context for 'which episodes did Rick appear in'...")
    merged = lookup_batch(build_index(compressed), [
        {"lookup": "type", "id": "Query"},
        {"lookup": "field", "typeId": "Character", "fieldId": "episode"},
        {"lookup": "search", "query": "air date"},
        {"lookup": "pattern", "patternName": "paginated", "params": {"item": "Episode"}},
        {"lookup": "type", "id": "Ghost"},
    ])
    summary = merged.metadata.summary
    print(f"   {summary.successful}/{summary.total} lookups succeeded")

    print("\n4. Prompt context:\n")
    print(render_context(merged))


if __name__ == "__main__":
    main()
