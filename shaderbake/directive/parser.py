"""Directive parser: token stream → CompilationConfig.

Directives follow the primary source expression of a request, separated by
commas:

    hlsl, vert, entry="vs_main", I "shaders/include", D USE_FOG, D FOG_COUNT="2"

Each keyword derives a new config from the previous one. Scalar fields are
last-wins; `I` and `D` append in the order they are written.
"""
from __future__ import annotations

from collections.abc import Iterable
from typing import Any, Callable, TypeAlias

from shaderbake.config import (
    STAGE_KEYWORDS,
    TARGET_KEYWORDS,
    CompilationConfig,
    Optimization,
    SourceLanguage,
)
from shaderbake.directive.lexer import Token, TokenKind, tokenize
from shaderbake.errors import DirectiveSyntaxError

DirectiveInput: TypeAlias = "str | Iterable[Token] | Iterable[str]"

_LANGUAGES: dict[str, SourceLanguage] = {
    "glsl": SourceLanguage.GLSL,
    "hlsl": SourceLanguage.HLSL,
    "wgsl": SourceLanguage.WGSL,
    "spvasm": SourceLanguage.SPIRV_ASSEMBLY,
}

# Keywords that take no argument and only set fields.
_FLAGS: dict[str, dict[str, Any]] = {
    "min_size": {"optimization": Optimization.MIN_SIZE},
    "max_perf": {"optimization": Optimization.MAX_PERFORMANCE},
    "no_debug": {"debug_info": False},
    "auto_bind": {"auto_bind_uniforms": True},
    "no_y_flip": {"flip_vertical_coordinate": False},
}


class _Cursor:
    """Position in the token list, with end-of-input reported as None."""

    def __init__(self, tokens: list[Token], end_offset: int) -> None:
        self.tokens = tokens
        self.index = 0
        self.end_offset = end_offset

    def peek(self) -> Token | None:
        return self.tokens[self.index] if self.index < len(self.tokens) else None

    def next(self) -> Token | None:
        tok = self.peek()
        if tok is not None:
            self.index += 1
        return tok

    def fail(self, message: str, tok: Token | None) -> DirectiveSyntaxError:
        if tok is None:
            return DirectiveSyntaxError(
                message, token="<end of input>", index=self.index, offset=self.end_offset
            )
        return DirectiveSyntaxError(
            message, token=tok.text, index=self.tokens.index(tok), offset=tok.offset
        )

    def expect(self, *kinds: TokenKind, what: str) -> Token:
        tok = self.next()
        if tok is None or tok.kind not in kinds:
            raise self.fail(f"expected {what}", tok)
        return tok


class DirectiveParser:
    """Parses directive lists into frozen CompilationConfig values."""

    def __init__(self, defaults: CompilationConfig | None = None) -> None:
        self.defaults = defaults or CompilationConfig()
        self._handlers: dict[str, Callable[[CompilationConfig, _Cursor], CompilationConfig]] = {
            "I": self._include_dir,
            "D": self._define,
            "entry": self._entry,
        }

    def parse(self, directives: DirectiveInput) -> CompilationConfig:
        """Build a config from directive text or an already tokenized stream.

        A list of strings is treated as one directive per item, so
        `["hlsl", 'I "inc"']` parses like `hlsl, I "inc"`.

        Raises:
            DirectiveSyntaxError: On an unknown keyword, a missing argument
                or separator, or text that does not tokenize.
        """
        tokens, end = self._tokens(directives)
        cursor = _Cursor(tokens, end)
        cfg = self.defaults

        first = cursor.peek()
        if first is not None and first.kind is TokenKind.SEPARATOR:
            cursor.next()

        while cursor.peek() is not None:
            keyword = cursor.expect(TokenKind.IDENT, what="a directive keyword")
            cfg = self._apply(cfg, keyword, cursor)
            tok = cursor.next()
            if tok is not None and tok.kind is not TokenKind.SEPARATOR:
                raise cursor.fail("expected ',' between directives", tok)
        return cfg

    def _tokens(
        self, directives: DirectiveInput
    ) -> tuple[list[Token], int]:
        if isinstance(directives, str):
            return list(tokenize(directives)), len(directives)
        items = list(directives)
        if all(isinstance(item, Token) for item in items):
            tokens: list[Token] = items  # type: ignore[assignment]
            end = tokens[-1].offset + len(tokens[-1].text) if tokens else 0
            return tokens, end
        return self._tokens(", ".join(str(item) for item in items))

    def _apply(self, cfg: CompilationConfig, keyword: Token, cursor: _Cursor) -> CompilationConfig:
        word = keyword.text
        if word in _LANGUAGES:
            update: dict[str, Any] = {"source_language": _LANGUAGES[word]}
            if word == "hlsl":
                # HLSL may be rejected by glslang with optimization disabled.
                update["optimization"] = Optimization.MAX_PERFORMANCE
            return cfg.model_copy(update=update)
        if word in STAGE_KEYWORDS:
            return cfg.model_copy(update={"stage": STAGE_KEYWORDS[word]})
        if word in TARGET_KEYWORDS:
            return cfg.with_target(TARGET_KEYWORDS[word])
        if word in _FLAGS:
            return cfg.model_copy(update=_FLAGS[word])
        handler = self._handlers.get(word)
        if handler is None:
            raise cursor.fail("unsupported compilation parameter", keyword)
        return handler(cfg, cursor)

    def _include_dir(self, cfg: CompilationConfig, cursor: _Cursor) -> CompilationConfig:
        path = cursor.expect(TokenKind.STRING, what='an include directory string after I')
        return cfg.model_copy(update={"include_dirs": cfg.include_dirs + (path.value,)})

    def _define(self, cfg: CompilationConfig, cursor: _Cursor) -> CompilationConfig:
        name = cursor.expect(TokenKind.IDENT, what="a macro name after D")
        value: str | None = None
        nxt = cursor.peek()
        if nxt is not None and nxt.kind is TokenKind.EQUALS:
            cursor.next()
            value = cursor.expect(
                TokenKind.STRING, TokenKind.IDENT, TokenKind.NUMBER,
                what=f"a value for macro {name.text}",
            ).value
        return cfg.model_copy(update={"defines": cfg.defines + ((name.text, value),)})

    def _entry(self, cfg: CompilationConfig, cursor: _Cursor) -> CompilationConfig:
        _ = cursor.expect(TokenKind.EQUALS, what="'=' after entry")
        name = cursor.expect(TokenKind.STRING, TokenKind.IDENT, what="an entry point name")
        return cfg.model_copy(update={"entry_point": name.value})


def parse_directives(directives: DirectiveInput) -> CompilationConfig:
    """Parse directives on top of the default config."""
    return DirectiveParser().parse(directives)
