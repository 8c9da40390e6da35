"""
Token definitions for the Go type expression lexer.

This module contains the TokenType enum, Token dataclass, and
constant mappings for keywords and punctuation.
"""

from dataclasses import dataclass
from enum import Enum, auto


class TokenType(Enum):
    """Enumeration of all token types recognized by the type lexer."""

    # Keywords
    MAP = auto()
    CHAN = auto()
    FUNC = auto()
    STRUCT = auto()
    INTERFACE = auto()

    # Literals
    IDENTIFIER = auto()
    NUMBER = auto()
    STRING_LITERAL = auto()

    # Operators
    STAR = auto()
    ARROW = auto()  # <-
    ELLIPSIS = auto()

    # Delimiters
    LPAREN = auto()
    RPAREN = auto()
    LBRACE = auto()
    RBRACE = auto()
    LBRACKET = auto()
    RBRACKET = auto()
    COMMA = auto()
    SEMICOLON = auto()

    # Special
    EOF = auto()


@dataclass
class Token:
    """Represents a single token from the lexer."""
    type: TokenType
    value: str
    line: int
    column: int


# Keyword to TokenType mapping
KEYWORDS = {
    'map': TokenType.MAP,
    'chan': TokenType.CHAN,
    'func': TokenType.FUNC,
    'struct': TokenType.STRUCT,
    'interface': TokenType.INTERFACE,
}

# Single-character delimiters
SINGLE_CHAR_OPS = {
    '*': TokenType.STAR,
    '(': TokenType.LPAREN,
    ')': TokenType.RPAREN,
    '{': TokenType.LBRACE,
    '}': TokenType.RBRACE,
    '[': TokenType.LBRACKET,
    ']': TokenType.RBRACKET,
    ',': TokenType.COMMA,
    ';': TokenType.SEMICOLON,
}

# A newline after one of these ends a struct field or interface method
SEMICOLON_TRIGGERS = frozenset([
    TokenType.IDENTIFIER,
    TokenType.NUMBER,
    TokenType.STRING_LITERAL,
    TokenType.RPAREN,
    TokenType.RBRACKET,
    TokenType.RBRACE,
])
