"""Tests for the tokenize, parse and detect steps."""

from __future__ import annotations

import pytest

from sdlpatterns.commands.analyze.steps.base import StepValidationError
from sdlpatterns.commands.analyze.steps.detect import DetectStep
from sdlpatterns.commands.analyze.steps.parse import ParseStep
from sdlpatterns.commands.analyze.steps.tokenize import TokenizeStep
from sdlpatterns.commands.analyze.steps.types import DetectionInput, SourceText, TokenStream
from sdlpatterns.patterns.engine import CancelToken
from sdlpatterns.patterns.errors import AnalysisCancelled
from sdlpatterns.patterns.registry import PatternRegistry
from sdlpatterns.sdl.errors import LexError, ParseError
from sdlpatterns.sdl.graph import SchemaGraph
from sdlpatterns.sdl.lexer import tokenize
from sdlpatterns.sdl.types import FieldDef, Token, TokenKind, TypeDef, TypeKind, TypeRef
from tests.conftest import StubMatcher


class TestTokenizeStep:
    @pytest.mark.asyncio
    async def test_tokens_end_with_eof(self):
        tokens = await TokenizeStep().run(SourceText(text="type A { a: Int }"))
        assert tokens[-1].kind == TokenKind.EOF
        assert len(tokens) == 8

    @pytest.mark.asyncio
    async def test_lex_error_propagates(self):
        with pytest.raises(LexError) as exc_info:
            await TokenizeStep().run(SourceText(text="type ?", source_name="s.graphql"))
        assert exc_info.value.source_name == "s.graphql"

    def test_validation_rejects_missing_eof(self):
        with pytest.raises(StepValidationError, match="exactly one EOF"):
            TokenizeStep()._validate_output([Token(TokenKind.NAME, "a", 1, 1)])

    def test_validation_rejects_extra_eof(self):
        eof = Token(TokenKind.EOF, "", 1, 1)
        with pytest.raises(StepValidationError) as exc_info:
            TokenizeStep()._validate_output([eof, eof])
        assert exc_info.value.details == {"eof_count": 2}


class TestParseStep:
    @pytest.mark.asyncio
    async def test_builds_graph(self):
        tokens = tokenize("type Query { a: Int }")
        graph = await ParseStep().run(TokenStream(tokens=tokens))
        assert isinstance(graph, SchemaGraph)
        assert list(graph.types) == ["Query"]

    @pytest.mark.asyncio
    async def test_parse_error_propagates(self):
        tokens = tokenize("type Query {")
        with pytest.raises(ParseError):
            await ParseStep().run(TokenStream(tokens=tokens))

    def test_validation_rejects_dangling_references(self):
        graph = SchemaGraph(
            {
                "A": TypeDef(
                    kind=TypeKind.OBJECT,
                    name="A",
                    fields=(FieldDef("b", TypeRef(name="Missing")),),
                )
            }
        )
        with pytest.raises(StepValidationError) as exc_info:
            ParseStep()._validate_output(graph)
        assert exc_info.value.details == {"names": ["Missing"]}


class TestDetectStep:
    @pytest.mark.asyncio
    async def test_runs_registry(self, catalog_graph):
        registry = PatternRegistry([StubMatcher("User")])
        result = await DetectStep().run(DetectionInput(graph=catalog_graph, registry=registry))
        assert [f.subject for f in result] == ["User"]

    @pytest.mark.asyncio
    async def test_cancel_token_is_honored(self, catalog_graph):
        token = CancelToken()
        token.cancel()
        with pytest.raises(AnalysisCancelled):
            await DetectStep(cancel=token).run(DetectionInput(graph=catalog_graph))
