"""Shared schema fixtures (Rick and Morty API shaped)."""

import copy

import pytest
from graphql import build_schema, introspection_from_schema


def _named(kind, name):
    return {"kind": kind, "name": name, "ofType": None}


def _non_null(of_type):
    return {"kind": "NON_NULL", "name": None, "ofType": of_type}


def _list(of_type):
    return {"kind": "LIST", "name": None, "ofType": of_type}


def _field(name, type_ref, description=None, args=None, deprecated=False):
    return {
        "name": name,
        "description": description,
        "args": args or [],
        "type": type_ref,
        "isDeprecated": deprecated,
        "deprecationReason": "No longer supported" if deprecated else None,
    }


def _object(name, fields, description=None):
    return {
        "kind": "OBJECT",
        "name": name,
        "description": description,
        "fields": fields,
        "inputFields": None,
        "interfaces": [],
        "enumValues": None,
        "possibleTypes": None,
    }


FULL_CHARACTER_SCHEMA = {
    "__schema": {
        "types": [
            _object(
                "Character",
                [
                    _field("id", _named("SCALAR", "ID"), "The id of the character."),
                    _field("name", _named("SCALAR", "String"), "The name of the character."),
                    _field(
                        "status",
                        _named("SCALAR", "String"),
                        "The status of the character ('Alive', 'Dead' or 'unknown').",
                    ),
                    _field(
                        "episodes",
                        _non_null(_list(_named("OBJECT", "Episode"))),
                        "Episodes in which this character appeared.",
                    ),
                    _field("oldStatus", _named("SCALAR", "String"), "Legacy status.", deprecated=True),
                ],
                "A character from the Rick and Morty universe",
            ),
            _object(
                "Episode",
                [
                    _field("id", _named("SCALAR", "ID"), "The id of the episode."),
                    _field("name", _named("SCALAR", "String"), "The name of the episode."),
                    _field("air_date", _named("SCALAR", "String"), "The air date of the episode."),
                    _field(
                        "characters",
                        _non_null(_list(_named("OBJECT", "Character"))),
                        "Characters that appeared in this episode.",
                    ),
                ],
                "A single episode of the series",
            ),
            _object(
                "Query",
                [
                    _field(
                        "character",
                        _named("OBJECT", "Character"),
                        "Get a specific character by ID",
                        args=[
                            {
                                "name": "id",
                                "description": "ID of the character",
                                "type": _non_null(_named("SCALAR", "ID")),
                                "defaultValue": None,
                            }
                        ],
                    ),
                    _field(
                        "episodes",
                        _list(_named("OBJECT", "Episode")),
                        "Get a list of episodes",
                        args=[
                            {
                                "name": "page",
                                "description": None,
                                "type": _named("SCALAR", "Int"),
                                "defaultValue": "1",
                            }
                        ],
                    ),
                ],
            ),
            {
                "kind": "ENUM",
                "name": "Status",
                "description": "Life status of a character",
                "fields": None,
                "inputFields": None,
                "interfaces": None,
                "enumValues": [
                    {"name": "ALIVE", "description": None, "isDeprecated": False, "deprecationReason": None},
                    {"name": "DEAD", "description": None, "isDeprecated": False, "deprecationReason": None},
                    {"name": "ZOMBIE", "description": None, "isDeprecated": True, "deprecationReason": "Gone"},
                ],
                "possibleTypes": None,
            },
            {
                "kind": "SCALAR",
                "name": "String",
                "description": "Built-in string",
                "fields": None,
                "inputFields": None,
                "interfaces": None,
                "enumValues": None,
                "possibleTypes": None,
            },
        ],
        "queryType": {"name": "Query"},
        "mutationType": None,
        "subscriptionType": None,
        "directives": [],
    }
}


COMPRESSED_SCHEMA = {
    "types": {
        "Character": {
            "kind": "OBJECT",
            "name": "Character",
            "description": "A character from the Rick and Morty universe",
            "fields": [
                {"name": "id", "type": "ID", "description": "The id of the character."},
                {"name": "name", "type": "String", "description": "The name of the character."},
                {
                    "name": "status",
                    "type": "String",
                    "description": "The status of the character ('Alive', 'Dead' or 'unknown').",
                },
                {
                    "name": "episodes",
                    "type": "[Episode]!",
                    "description": "Episodes in which this character appeared.",
                },
            ],
        },
        "Episode": {
            "kind": "OBJECT",
            "name": "Episode",
            "description": "A single episode of the series",
            "fields": [
                {"name": "id", "type": "ID", "description": "The id of the episode."},
                {"name": "name", "type": "String", "description": "The name of the episode."},
                {
                    "name": "characters",
                    "type": "[Character]!",
                    "description": "Characters that appeared in this episode.",
                },
            ],
        },
        "Query": {
            "kind": "OBJECT",
            "name": "Query",
            "fields": [
                {
                    "name": "character",
                    "type": "Character",
                    "description": "Get a specific character by ID",
                    "args": [{"name": "id", "type": "ID!", "description": "ID of the character"}],
                },
            ],
        },
    },
    "_patterns": {
        "connection": {
            "fields": [
                {"name": "info", "type": "Info"},
                {"name": "results", "type": "[{item}]"},
            ],
        },
    },
    "queryType": "Query",
}


BLOG_SCHEMA = {
    "__schema": {
        "types": [
            {
                "kind": "OBJECT",
                "name": "User",
                "description": "A user in the system",
                "fields": [
                    {"name": "id", "type": _non_null(_named("SCALAR", "ID"))},
                    {"name": "posts", "type": _list(_named("OBJECT", "Post"))},
                ],
            },
            {
                "kind": "OBJECT",
                "name": "Post",
                "description": "A blog post",
                "fields": [
                    {"name": "id", "type": _non_null(_named("SCALAR", "ID"))},
                    {"name": "author", "type": _named("OBJECT", "User")},
                    {"name": "title", "type": _named("SCALAR", "String")},
                ],
            },
        ],
        "queryType": {"name": "Query"},
    }
}


RICK_AND_MORTY_SDL = '''
"""A character from the Rick and Morty universe"""
type Character {
  "The id of the character."
  id: ID!
  "The name of the character."
  name: String
  status: Status
  "Episodes in which this character appeared."
  episode: [Episode]!
  origin: Location
  legacyName: String @deprecated(reason: "Use name")
}

type Episode {
  id: ID!
  name: String
  air_date: String
  characters: [Character]!
}

type Location {
  id: ID!
  name: String
  residents: [Character]!
}

enum Status {
  ALIVE
  DEAD
  UNKNOWN
  ZOMBIE @deprecated
}

input FilterCharacter {
  name: String
  status: Status = ALIVE
}

type Characters {
  results: [Character]
}

type Query {
  character(id: ID!): Character
  characters(page: Int = 1, filter: FilterCharacter): Characters
  episode(id: ID!): Episode
}
'''


@pytest.fixture
def full_schema():
    """Introspection envelope with Character/Episode/Query."""
    return copy.deepcopy(FULL_CHARACTER_SCHEMA)


@pytest.fixture
def compressed_schema():
    """Compressed document with a ``connection`` pattern."""
    return copy.deepcopy(COMPRESSED_SCHEMA)


@pytest.fixture
def blog_schema():
    """Minimal User/Post introspection envelope."""
    return copy.deepcopy(BLOG_SCHEMA)


@pytest.fixture
def introspection():
    """Introspection produced by graphql-core from SDL."""
    schema = build_schema(RICK_AND_MORTY_SDL)
    return {"__schema": introspection_from_schema(schema)["__schema"]}
