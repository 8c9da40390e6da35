"""
Lexer implementation for Go type expressions.

The Lexer tokenizes type expression strings such as
``map[string]*github.com/acme/pkg.Item`` into a stream of tokens that can
be consumed by the type parser. Qualified names, import path included,
are read as a single identifier token.
"""

from typing import List

from .errors import TypeSyntaxError
from .tokens import Token, TokenType, KEYWORDS, SINGLE_CHAR_OPS, SEMICOLON_TRIGGERS


class Lexer:
    """
    Lexer for Go type expressions.

    Converts source text into a list of tokens for parsing.
    """

    def __init__(self, source: str):
        self.source = source
        self.pos = 0
        self.line = 1
        self.column = 1
        self.tokens: List[Token] = []

    def peek(self, offset: int = 0) -> str:
        """Look ahead in the source without consuming."""
        pos = self.pos + offset
        if pos >= len(self.source):
            return ''
        return self.source[pos]

    def advance(self) -> str:
        """Consume and return the current character."""
        ch = self.peek()
        self.pos += 1
        if ch == '\n':
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        return ch

    def skip_whitespace(self) -> None:
        """Skip whitespace, turning significant newlines into semicolons."""
        ch = self.peek()
        while ch and ch in ' \t\r\n':
            if ch == '\n' and self.tokens and self.tokens[-1].type in SEMICOLON_TRIGGERS:
                self.tokens.append(Token(TokenType.SEMICOLON, '\n', self.line, self.column))
            self.advance()
            ch = self.peek()

    def read_string(self) -> str:
        """Read a struct tag literal including its quotes."""
        quote = self.advance()
        result = quote
        while self.peek() and self.peek() != quote:
            if self.peek() == '\\' and quote == '"':
                result += self.advance()
            result += self.advance()
        if self.peek() != quote:
            raise TypeSyntaxError('Unterminated string literal', self.source, self.line, self.column)
        result += self.advance()
        return result

    def read_number(self) -> str:
        """Read an array length."""
        result = ''
        while self.peek().isdigit() or self.peek() == '_':
            ch = self.advance()
            if ch != '_':
                result += ch
        return result

    def read_identifier(self) -> str:
        """Read an identifier, keyword or import-path qualified name."""
        result = ''
        while self.peek():
            ch = self.peek()
            if ch.isalnum() or ch in '_/-':
                result += self.advance()
            elif ch == '.' and self.peek(1) != '.':
                result += self.advance()
            else:
                break
        return result

    def add_token(self, token_type: TokenType, value: str) -> None:
        """Add a token to the token list."""
        self.tokens.append(Token(token_type, value, self.line, self.column))

    def tokenize(self) -> List[Token]:
        """
        Tokenize the entire source and return a list of tokens.

        Returns:
            List of Token objects, ending with an EOF token.
        """
        while self.pos < len(self.source):
            self.skip_whitespace()

            if self.pos >= len(self.source):
                break

            start_line = self.line
            start_col = self.column
            ch = self.peek()

            # Struct tags
            if ch in '"`':
                value = self.read_string()
                self.tokens.append(Token(TokenType.STRING_LITERAL, value, start_line, start_col))
                continue

            # Array lengths
            if ch.isdigit():
                value = self.read_number()
                self.tokens.append(Token(TokenType.NUMBER, value, start_line, start_col))
                continue

            # Identifiers and keywords
            if ch.isalpha() or ch == '_':
                value = self.read_identifier()
                token_type = KEYWORDS.get(value, TokenType.IDENTIFIER)
                self.tokens.append(Token(token_type, value, start_line, start_col))
                continue

            if ch == '.' and self.peek(1) == '.' and self.peek(2) == '.':
                self.advance()
                self.advance()
                self.advance()
                self.tokens.append(Token(TokenType.ELLIPSIS, '...', start_line, start_col))
                continue

            if ch == '<' and self.peek(1) == '-':
                self.advance()
                self.advance()
                self.tokens.append(Token(TokenType.ARROW, '<-', start_line, start_col))
                continue

            if ch in SINGLE_CHAR_OPS:
                self.advance()
                self.tokens.append(Token(SINGLE_CHAR_OPS[ch], ch, start_line, start_col))
                continue

            raise TypeSyntaxError(f'Unexpected character {ch!r}', self.source, start_line, start_col)

        self.tokens.append(Token(TokenType.EOF, '', self.line, self.column))
        return self.tokens
