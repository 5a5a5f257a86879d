"""Shared fixtures for schema and document tests."""

import pytest
from graphql import build_schema

SCHEMA_SDL = """
\"\"\"Episodes of the original trilogy\"\"\"
enum Episode {
  \"\"\"Released in 1977\"\"\"
  NEWHOPE
  EMPIRE
  JEDI
}

enum Color {
  RED
  GREEN
}

scalar DateTime

interface Character {
  id: ID!
  name: String!
  friends: [Character]
}

type Human implements Character {
  id: ID!
  name: String!
  friends: [Character]
  height: Float
  favoriteColor: Color
}

type Droid implements Character {
  id: ID!
  name: String!
  friends: [Character]
  primaryFunction: String
}

type User {
  id: ID!
  \"\"\"Display name\"\"\"
  name: String
  createdAt: DateTime
  friends: [User!]!
}

union SearchResult = Human | Droid

input ReviewFilter {
  episode: Episode
  parent: ReviewFilter
}

input CreateUserInput {
  name: String!
  filter: ReviewFilter
}

type Query {
  user(id: ID!): User
  hero(episode: Episode): Character
  search(text: String!): [SearchResult]
  viewerId: ID
}

type Mutation {
  createUser(input: CreateUserInput!): User
}

type Subscription {
  userAdded: User
}
"""


@pytest.fixture
def schema_sdl():
    return SCHEMA_SDL


@pytest.fixture
def schema():
    return build_schema(SCHEMA_SDL)


@pytest.fixture
def schema_file(tmp_path):
    path = tmp_path / "schema.graphql"
    path.write_text(SCHEMA_SDL)
    return path
