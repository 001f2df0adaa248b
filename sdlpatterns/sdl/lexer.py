"""Tokenize GraphQL SDL text with graphql-core's lexer.

Commas, whitespace and the byte order mark are insignificant and dropped.
``#`` comments are not emitted as tokens: graphql-core keeps them in its
token chain, and each one is attached to the next token (EOF included) so
the parser can read annotated intent such as ``# only available for
Movies``. Pass ``keep_comments=True`` to also get them as COMMENT tokens,
e.g. for highlighting.
"""

from __future__ import annotations

from graphql.error import GraphQLSyntaxError
from graphql.language import Lexer, Source
from graphql.language import TokenKind as GqlTokenKind
from graphql.language.ast import Token as GqlToken

from sdlpatterns.sdl.errors import LexError
from sdlpatterns.sdl.types import Comment, Token, TokenKind

_KINDS = {
    GqlTokenKind.NAME: TokenKind.NAME,
    GqlTokenKind.INT: TokenKind.INT,
    GqlTokenKind.FLOAT: TokenKind.FLOAT,
    GqlTokenKind.STRING: TokenKind.STRING,
    GqlTokenKind.BLOCK_STRING: TokenKind.STRING,
    GqlTokenKind.EOF: TokenKind.EOF,
}


def tokenize(
    text: str,
    source_name: str | None = None,
    *,
    keep_comments: bool = False,
) -> list[Token]:
    """Turn SDL text into tokens, always ending with a single EOF token.

    Raises LexError on the first character that cannot start a token.
    """
    lexer = Lexer(Source(text, source_name or "GraphQL request"))
    tokens: list[Token] = []
    try:
        while True:
            raw = lexer.advance()
            comments = _comments_before(raw)
            if keep_comments:
                tokens.extend(Token(TokenKind.COMMENT, c.text, c.line, c.column) for c in comments)
            tokens.append(_convert(raw, text, comments))
            if raw.kind == GqlTokenKind.EOF:
                return tokens
    except GraphQLSyntaxError as e:
        raise _lex_error(e, source_name) from e


def _comments_before(raw: GqlToken) -> tuple[Comment, ...]:
    """Comment tokens linked between ``raw`` and the previous real token."""
    found: list[Comment] = []
    prev = raw.prev
    while prev is not None and prev.kind == GqlTokenKind.COMMENT:
        found.append(Comment((prev.value or "").strip(), prev.line, prev.column))
        prev = prev.prev
    return tuple(reversed(found))


def _convert(raw: GqlToken, text: str, comments: tuple[Comment, ...]) -> Token:
    kind = _KINDS.get(raw.kind, TokenKind.PUNCT)
    if kind == TokenKind.PUNCT:
        value = raw.kind.value
    elif kind == TokenKind.EOF:
        value = ""
    else:
        value = raw.value or ""
    return Token(
        kind,
        value,
        raw.line,
        raw.column,
        comments=comments,
        block=raw.kind == GqlTokenKind.BLOCK_STRING,
        raw=text[raw.start : raw.end],
    )


def _lex_error(e: GraphQLSyntaxError, source_name: str | None) -> LexError:
    line, column = 1, 1
    if e.locations:
        line, column = e.locations[0].line, e.locations[0].column
    message = e.description.removesuffix(".")
    return LexError(message, line, column, source_name)
