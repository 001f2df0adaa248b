"""Tests for sdlpatterns/sdl/lexer.py."""

from __future__ import annotations

import pytest

from graphql.error import GraphQLSyntaxError
from graphql.language.print_string import print_string

from sdlpatterns.sdl.errors import LexError
from sdlpatterns.sdl.lexer import tokenize
from sdlpatterns.sdl.types import Comment, Token, TokenKind


def _kinds_values(text: str) -> list[tuple[TokenKind, str]]:
    return [(t.kind, t.value) for t in tokenize(text)]


class TestTokens:
    def test_simple_type(self) -> None:
        assert _kinds_values("type Query { id: ID! }") == [
            (TokenKind.NAME, "type"),
            (TokenKind.NAME, "Query"),
            (TokenKind.PUNCT, "{"),
            (TokenKind.NAME, "id"),
            (TokenKind.PUNCT, ":"),
            (TokenKind.NAME, "ID"),
            (TokenKind.PUNCT, "!"),
            (TokenKind.PUNCT, "}"),
            (TokenKind.EOF, ""),
        ]

    def test_empty_input_is_just_eof(self) -> None:
        assert tokenize("") == [Token(TokenKind.EOF, "", 1, 1)]

    def test_eof_positioned_past_last_character(self) -> None:
        eof = tokenize("type Query { id: ID! }")[-1]
        assert (eof.line, eof.column) == (1, 23)

    def test_exactly_one_eof(self) -> None:
        tokens = tokenize("a\nb\n\n")
        assert [t.kind for t in tokens].count(TokenKind.EOF) == 1
        assert tokens[-1].kind == TokenKind.EOF

    def test_commas_dropped_bom_counts_as_column(self) -> None:
        tokens = tokenize("\ufeffa, b")
        assert [(t.value, t.column) for t in tokens[:-1]] == [("a", 2), ("b", 5)]

    def test_positions_across_line_endings(self) -> None:
        tokens = tokenize("a\r\n  b\rc\n\td")
        assert [(t.value, t.line, t.column) for t in tokens[:-1]] == [
            ("a", 1, 1),
            ("b", 2, 3),
            ("c", 3, 1),
            ("d", 4, 2),
        ]

    def test_spread_and_punctuators(self) -> None:
        values = [t.value for t in tokenize("... & | = @ $ ( ) [ ]")[:-1]]
        assert values == ["...", "&", "|", "=", "@", "$", "(", ")", "[", "]"]

    def test_numbers(self) -> None:
        assert _kinds_values("1 -2 3.5 1e3 0")[:-1] == [
            (TokenKind.INT, "1"),
            (TokenKind.INT, "-2"),
            (TokenKind.FLOAT, "3.5"),
            (TokenKind.FLOAT, "1e3"),
            (TokenKind.INT, "0"),
        ]


class TestStrings:
    def test_escapes_decoded(self) -> None:
        token = tokenize(r'"a\nb\u0041\"\\"')[0]
        assert token.kind == TokenKind.STRING
        assert token.value == 'a\nbA"\\'
        assert not token.block

    def test_block_string_strips_indentation(self) -> None:
        token = tokenize('"""\n    Hello\n      world\n    """')[0]
        assert token.value == "Hello\n  world"
        assert token.block

    def test_block_string_escaped_triple_quote(self) -> None:
        assert tokenize('"""say \\""" twice"""')[0].value == 'say """ twice'

    def test_block_string_keeps_line_count(self) -> None:
        tokens = tokenize('"""\nline\n"""\nname')
        assert (tokens[1].line, tokens[1].column) == (4, 1)

    def test_printed_strings_read_back(self) -> None:
        for value in ["plain", 'a"b\n', "tab\there", "bell\x07", "back\\slash"]:
            quoted = print_string(value)
            assert "\n" not in quoted
            assert tokenize(quoted)[0].value == value

    def test_raw_source_text_kept(self) -> None:
        token = tokenize('"a\\u0041"')[0]
        assert token.value == "aA"
        assert token.raw == '"a\\u0041"'


class TestComments:
    def test_comment_attached_to_next_token(self) -> None:
        tokens = tokenize("# hi\ntype A")
        assert tokens[0].comments == (Comment("hi", 1, 1),)
        assert tokens[1].comments == ()

    def test_trailing_comment_attached_to_eof(self) -> None:
        eof = tokenize("a # end")[-1]
        assert [c.text for c in eof.comments] == ["end"]

    def test_comments_not_emitted_by_default(self) -> None:
        assert TokenKind.COMMENT not in {t.kind for t in tokenize("# x\na # y")}

    def test_keep_comments_emits_comment_tokens(self) -> None:
        tokens = tokenize("# only for Movies\ndirector", keep_comments=True)
        assert [(t.kind, t.value) for t in tokens] == [
            (TokenKind.COMMENT, "only for Movies"),
            (TokenKind.NAME, "director"),
            (TokenKind.EOF, ""),
        ]
        assert tokens[1].comments == (Comment("only for Movies", 1, 1),)


    def test_comment_between_fields_goes_to_following_field(self) -> None:
        tokens = tokenize("type Movie {\n  title: String\n  # only available for Movies\n  director: String\n}")
        director = next(t for t in tokens if t.value == "director")
        assert director.comments == (Comment("only available for Movies", 3, 3),)
        title_type = tokens[5]
        assert title_type.value == "String" and title_type.comments == ()

    def test_consecutive_comments_in_order(self) -> None:
        eof = tokenize("# one\n# two\n")[-1]
        assert [c.text for c in eof.comments] == ["one", "two"]


class TestLexErrors:
    def test_unterminated_string_reports_where_it_breaks(self) -> None:
        with pytest.raises(LexError, match="Unterminated string") as exc_info:
            tokenize('type A {\n  "oops\n}')
        assert (exc_info.value.line, exc_info.value.column) == (2, 8)

    def test_unterminated_block_string(self) -> None:
        with pytest.raises(LexError, match="Unterminated string") as exc_info:
            tokenize('"""never closed')
        assert exc_info.value.column == 16

    def test_invalid_escape(self) -> None:
        with pytest.raises(LexError, match="Invalid character escape sequence"):
            tokenize(r'"\q"')

    def test_short_unicode_escape(self) -> None:
        with pytest.raises(LexError, match="Invalid Unicode escape sequence"):
            tokenize(r'"\u12"')

    def test_unexpected_character(self) -> None:
        with pytest.raises(LexError, match=r"Unexpected character: '\?'") as exc_info:
            tokenize("type A ?")
        assert (exc_info.value.line, exc_info.value.column) == (1, 8)
        assert not exc_info.value.message.endswith(".")

    def test_two_dots(self) -> None:
        with pytest.raises(LexError, match=r"did you mean '\.\.\.'"):
            tokenize("a .. b")

    def test_lone_dot(self) -> None:
        with pytest.raises(LexError, match=r"Unexpected character: '\.'"):
            tokenize("a . b")

    def test_number_followed_by_letter(self) -> None:
        with pytest.raises(LexError, match="Invalid number") as exc_info:
            tokenize("12abc")
        assert exc_info.value.column == 3

    def test_source_name_in_message(self) -> None:
        with pytest.raises(LexError) as exc_info:
            tokenize("%", source_name="schema.graphql")
        assert str(exc_info.value).startswith("schema.graphql:1:1: ")
        assert exc_info.value.location == "schema.graphql:1:1"

    def test_graphql_error_chained(self) -> None:
        with pytest.raises(LexError) as exc_info:
            tokenize("type A ?")
        assert isinstance(exc_info.value.__cause__, GraphQLSyntaxError)
