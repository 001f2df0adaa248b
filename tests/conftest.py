"""Shared test fixtures for sdl-patterns tests."""

from __future__ import annotations

import pytest

from sdlpatterns.patterns.base import Matcher
from sdlpatterns.patterns.types import Finding
from sdlpatterns.sdl.graph import SchemaGraph
from sdlpatterns.sdl.parser import parse_sdl

CATALOG_SDL = '''\
# Entry points
"Root query"
type Query {
  "Look up one user"
  user(id: ID!): User
  users(first: Int = 10, after: String): UserConnection!
  search(term: String!, kinds: [SearchKind!] = [USER, MOVIE]): [SearchResult!]!
  products(limit: Int, offset: Int): [Product!]!
}

type Mutation {
  addUser(input: AddUserInput!): AddUserPayload @deprecated(reason: "use register")
}

directive @auth(role: String = "admin") repeatable on FIELD_DEFINITION | OBJECT

interface Node {
  id: ID!
}

type User implements Node @auth {
  id: ID!
  # shown on profile
  name: String
  tags: [[String!]]!
  createdAt: String
  createdAtUnix: Int
}

enum SearchKind {
  USER
  MOVIE
}

union SearchResult = User | Movie

type Movie implements Node {
  id: ID!
  title(locale: String = "en-US"): String # localized
}

type Product {
  sku: String!
}

input AddUserInput {
  name: String!
  age: Int = 18
  ratio: Float = 1.5
  active: Boolean = true
  nick: String = null
  filter: UserFilter = {name: "x", ids: [1, 2]}
}

input UserFilter {
  name: String
  ids: [Int]
}

type AddUserPayload {
  user: User
}

type UserConnection {
  edges: [UserEdge]
  pageInfo: PageInfo!
}

type UserEdge {
  node: User
  cursor: String!
}

type PageInfo {
  hasNextPage: Boolean!
}

scalar DateTime
'''


class StubMatcher(Matcher):
    """Emits one fixed finding per call."""

    pattern_id = "stub"
    title = "Stub"

    def __init__(self, subject_type: str = "Query", name: str | None = None):
        super().__init__(name)
        self.subject_type = subject_type

    def detect(self, graph: SchemaGraph) -> list[Finding]:
        return [self.finding(self.subject_type, "stubbed")]


class BoomMatcher(Matcher):
    """Always raises."""

    pattern_id = "boom"

    def detect(self, graph: SchemaGraph) -> list[Finding]:
        raise RuntimeError("boom")


@pytest.fixture
def catalog_sdl() -> str:
    return CATALOG_SDL


@pytest.fixture
def catalog_graph() -> SchemaGraph:
    return parse_sdl(CATALOG_SDL, source_name="catalog.graphql")


@pytest.fixture
def schema_file(tmp_path):
    """Write SDL to a temp .graphql file and return its path."""

    def _write(sdl: str = CATALOG_SDL, name: str = "schema.graphql") -> str:
        path = tmp_path / name
        path.write_text(sdl)
        return str(path)

    return _write
