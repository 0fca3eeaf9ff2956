"""Tests for single lookups against the type index."""

import pytest
from graphql import build_schema, introspection_from_schema

from gql_lens.core.compressor import CompressionOptions, compress
from gql_lens.core.errors import (
    FieldNotFoundError,
    InvalidSchemaError,
    LookupFailedError,
    PatternNotFoundError,
    SchemaValidationError,
    TypeNotFoundError,
    UnknownLookupKindError,
    UnsupportedLookupError,
)
from gql_lens.core.index import CompressedTypeIndex, FullTypeIndex, SchemaForm, build_index, detect_form
from gql_lens.core.lookup import lookup
from gql_lens.core.requests import TypeLookup


class TestBuildIndex:
    """Tests for form detection and indexing."""

    def test_detects_full(self, full_schema):
        assert detect_form(full_schema) is SchemaForm.FULL
        index = build_index(full_schema)
        assert isinstance(index, FullTypeIndex)
        assert len(index) == 5
        assert index.root_types == {"queryType": "Query"}

    def test_detects_compressed(self, compressed_schema):
        assert detect_form(compressed_schema) is SchemaForm.COMPRESSED
        index = build_index(compressed_schema)
        assert isinstance(index, CompressedTypeIndex)
        assert "Character" in index
        assert index.supports_patterns

    def test_missing_root(self):
        with pytest.raises(InvalidSchemaError, match="missing schema root"):
            build_index({"foo": "bar"})

    def test_invalid_shape(self):
        with pytest.raises(SchemaValidationError):
            build_index({"__schema": {"types": [{"kind": "OBJECT", "name": "User", "fields": "oops"}]}})

    def test_forced_form(self, compressed_schema):
        with pytest.raises(SchemaValidationError):
            build_index(compressed_schema, form="full")


class TestTypeAndFieldLookup:
    """Tests for type and field lookups in both forms."""

    def test_type_full(self, full_schema):
        result = lookup(full_schema, {"lookup": "type", "id": "Character"})
        assert result == full_schema["__schema"]["types"][0]

    def test_type_compressed(self, compressed_schema):
        result = lookup(compressed_schema, TypeLookup(id="Character"))
        assert result == compressed_schema["types"]["Character"]

    def test_type_not_found(self, full_schema):
        with pytest.raises(TypeNotFoundError, match="Type not found: NonExistentType"):
            lookup(full_schema, {"lookup": "type", "id": "NonExistentType"})

    def test_field(self, full_schema):
        result = lookup(full_schema, {"lookup": "field", "typeId": "Character", "fieldId": "status"})
        assert result == full_schema["__schema"]["types"][0]["fields"][2]

    def test_field_not_found(self, compressed_schema):
        with pytest.raises(FieldNotFoundError, match="Field not found: nonExistentField on type Character"):
            lookup(compressed_schema, {"lookup": "field", "typeId": "Character", "fieldId": "nonExistentField"})

    def test_field_on_missing_type(self, compressed_schema):
        with pytest.raises(TypeNotFoundError):
            lookup(compressed_schema, {"lookup": "field", "typeId": "Ghost", "fieldId": "id"})

    def test_unknown_kind(self, compressed_schema):
        with pytest.raises(UnknownLookupKindError):
            lookup(compressed_schema, {"lookup": "invalid", "id": "Character"})

    def test_errors_share_a_base(self, compressed_schema):
        with pytest.raises(LookupFailedError):
            lookup(compressed_schema, {"lookup": "type", "id": "Ghost"})

    def test_compressed_matches_original(self, full_schema):
        compressed = compress(full_schema)
        original = lookup(full_schema, {"lookup": "type", "id": "Character"})
        result = lookup(compressed, {"lookup": "type", "id": "Character"})
        assert result["name"] == original["name"]
        assert result["kind"] == original["kind"]
        assert result["description"] == original["description"]

        episodes = lookup(compressed, {"lookup": "field", "typeId": "Character", "fieldId": "episodes"})
        assert episodes["type"] == "[Episode]!"

    def test_stripped_descriptions_still_searchable_by_name(self, full_schema):
        compressed = compress(full_schema, CompressionOptions(remove_descriptions=True))
        result = lookup(compressed, {"lookup": "search", "query": "episodes"})
        assert result.results[0].path == "Character.episodes"


class TestRelationships:
    """Tests for relationship lookups."""

    def test_outgoing_and_incoming(self, compressed_schema):
        result = lookup(compressed_schema, {"lookup": "relationships", "typeId": "Character"})
        assert result.outgoing == {"episodes": "Episode"}
        assert result.incoming == {"Episode.characters": "Episode", "Query.character": "Query"}

    def test_full_form_matches_compressed(self, full_schema):
        full = lookup(full_schema, {"lookup": "relationships", "typeId": "Character"})
        compressed = lookup(compress(full_schema), {"lookup": "relationships", "typeId": "Character"})
        assert full == compressed

    def test_scalar_has_incoming_only(self, full_schema):
        result = lookup(full_schema, {"lookup": "relationships", "typeId": "String"})
        assert result.outgoing == {}
        assert result.incoming["Character.name"] == "Character"
        assert result.incoming["Episode.air_date"] == "Episode"

    def test_interface_target_has_incoming(self):
        schema = build_schema(
            """
            interface Character { name: String }
            type Human implements Character { name: String friends: [Character] }
            type Query { hero: Character human: Human }
            """
        )
        introspection = introspection_from_schema(schema)
        result = lookup(introspection, {"lookup": "relationships", "typeId": "Character"})
        assert result.incoming == {"Human.friends": "Human", "Query.hero": "Query"}
        assert result.outgoing == {}

        compressed = lookup(compress(introspection), {"lookup": "relationships", "typeId": "Character"})
        assert compressed == result

    def test_scalar_fields_not_outgoing(self, compressed_schema):
        result = lookup(compressed_schema, {"lookup": "relationships", "typeId": "Query"})
        assert result.outgoing == {"character": "Character"}

    def test_unknown_type(self, compressed_schema):
        with pytest.raises(TypeNotFoundError):
            lookup(compressed_schema, {"lookup": "relationships", "typeId": "Ghost"})

    def test_to_dict(self, compressed_schema):
        result = lookup(compressed_schema, {"lookup": "relationships", "typeId": "Episode"})
        assert result.to_dict() == {
            "outgoing": {"characters": "Character"},
            "incoming": {"Character.episodes": "Character"},
        }

    def test_symmetry(self, introspection):
        for type_id, field_name, target in [
            ("Character", "episode", "Episode"),
            ("Episode", "characters", "Character"),
            ("Character", "origin", "Location"),
        ]:
            outgoing = lookup(introspection, {"lookup": "relationships", "typeId": type_id}).outgoing
            incoming = lookup(introspection, {"lookup": "relationships", "typeId": target}).incoming
            assert outgoing[field_name] == target
            assert incoming[f"{type_id}.{field_name}"] == type_id


class TestSearch:
    """Tests for search lookups."""

    def test_ranked_results(self, compressed_schema):
        result = lookup(compressed_schema, {"lookup": "search", "query": "character"})
        paths = [r.path for r in result.results]
        assert paths == ["Character", "Episode.characters", "Query.character", "Character.id", "Character.name"]
        assert result.results[0].relevance == pytest.approx(0.8)
        assert result.results[0].type == "OBJECT"
        assert result.results[1].type == "Character"
        assert result.results[3].relevance == pytest.approx(0.3)

    def test_related_types_from_results(self, compressed_schema):
        result = lookup(compressed_schema, {"lookup": "search", "query": "character"})
        assert result.related_types == ["Character", "Episode", "Query"]

    def test_limit(self, compressed_schema):
        result = lookup(compressed_schema, {"lookup": "search", "query": "character", "limit": 1})
        assert [r.path for r in result.results] == ["Character"]
        assert result.related_types == ["Character"]

    def test_relevance_capped(self, compressed_schema):
        result = lookup(compressed_schema, {"lookup": "search", "query": "character character character"})
        assert result.results[0].relevance == 1.0
        assert all(0 < r.relevance <= 1.0 for r in result.results)

    def test_sorted_descending(self, full_schema):
        result = lookup(full_schema, {"lookup": "search", "query": "episode air", "limit": 20})
        relevances = [r.relevance for r in result.results]
        assert relevances == sorted(relevances, reverse=True)

    def test_no_match(self, compressed_schema):
        result = lookup(compressed_schema, {"lookup": "search", "query": "spaceship"})
        assert result.results == []
        assert result.related_types == []

    def test_empty_query(self, compressed_schema):
        result = lookup(compressed_schema, {"lookup": "search", "query": "   "})
        assert result.results == []

    def test_introspection_types_skipped(self, introspection):
        result = lookup(introspection, {"lookup": "search", "query": "type", "limit": 50})
        assert not [r for r in result.results if r.path.startswith("__")]


class TestPatterns:
    """Tests for pattern lookups."""

    def test_expand(self, compressed_schema):
        result = lookup(
            compressed_schema,
            {"lookup": "pattern", "patternName": "connection", "params": {"item": "Character"}},
        )
        assert result.kind == "OBJECT"
        assert result.fields == [
            {"name": "info", "type": "Info"},
            {"name": "results", "type": "[Character]"},
        ]

    def test_unfilled_placeholders_kept(self, compressed_schema):
        result = lookup(compressed_schema, {"lookup": "pattern", "patternName": "connection"})
        assert result.fields[1]["type"] == "[{item}]"

    def test_not_found(self, compressed_schema):
        with pytest.raises(PatternNotFoundError, match="Pattern not found: nonExistentPattern"):
            lookup(compressed_schema, {"lookup": "pattern", "patternName": "nonExistentPattern"})

    def test_unsupported_on_full_schema(self, full_schema):
        with pytest.raises(UnsupportedLookupError) as exc_info:
            lookup(full_schema, {"lookup": "pattern", "patternName": "connection"})
        assert str(exc_info.value) == (
            "Pattern lookup is not supported on full schema - use compressed schema for patterns"
        )
