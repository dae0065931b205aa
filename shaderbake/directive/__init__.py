"""Directive DSL: the keyword list that configures a compilation request."""
from __future__ import annotations

from shaderbake.directive.lexer import Token, TokenKind, tokenize
from shaderbake.directive.parser import DirectiveInput, DirectiveParser, parse_directives

__all__ = ["DirectiveInput", "DirectiveParser", "Token", "TokenKind", "parse_directives", "tokenize"]
