"""
Go type expression parser.

The TypeParser converts a stream of tokens from the Lexer into a type
expression tree. Names are resolved through a TypeScope so that every
occurrence of a named type shares one Named node.
"""

from typing import Dict, List, Optional, Tuple

from .errors import TypeSyntaxError
from .lexer import Lexer
from .tokens import Token, TokenType
from ..codegen.naming import sanitize_identifier
from ..model import (
    BASIC_TYPE_NAMES,
    TypeExpr,
    Package,
    Basic,
    Named,
    Pointer,
    Array,
    Slice,
    Map,
    Chan,
    ChanDir,
    Signature,
    Var,
    Struct,
    Field,
    Interface,
    Method,
    error_type,
)


# Tokens that can start a type
TYPE_START = frozenset([
    TokenType.IDENTIFIER,
    TokenType.STAR,
    TokenType.LBRACKET,
    TokenType.MAP,
    TokenType.CHAN,
    TokenType.ARROW,
    TokenType.FUNC,
    TokenType.STRUCT,
    TokenType.INTERFACE,
    TokenType.LPAREN,
])


def default_package_name(path: str) -> str:
    """
    Guess the package name of an import path.

    Handles:
    - github.com/acme/fetch -> fetch
    - github.com/acme/fetch/v2 -> fetch
    - gopkg.in/yaml.v2 -> yaml
    - github.com/acme/go-cache -> cache
    """
    segments = [s for s in path.split('/') if s]
    if not segments:
        return ''
    name = segments[-1]
    if len(segments) > 1 and name[:1] == 'v' and name[1:].isdigit():
        name = segments[-2]
    name = name.split('.')[0]
    if name.startswith('go-'):
        name = name[3:]
    return sanitize_identifier(name)


class TypeScope:
    """
    Resolves the names appearing in type expressions.

    Unqualified names that are not predeclared belong to ``package``.
    Qualified names (``import/path.Name``) belong to the package at that
    path. Named nodes are created once per (path, name) pair.
    """

    def __init__(
        self,
        package: Optional[Package] = None,
        package_names: Optional[Dict[str, str]] = None,
    ):
        self.package = package
        self.package_names: Dict[str, str] = dict(package_names or {})
        self.named: Dict[Tuple[str, str], Named] = {}
        self._packages: Dict[str, Package] = {}
        if package is not None:
            self._packages[package.path] = package

    def package_for(self, path: str) -> Package:
        """Get the package for an import path."""
        package = self._packages.get(path)
        if package is None:
            name = self.package_names.get(path) or default_package_name(path)
            package = Package(path=path, name=name)
            self._packages[path] = package
        return package

    def lookup(self, ident: str) -> TypeExpr:
        """Resolve a possibly qualified identifier to a type expression."""
        if '.' not in ident and '/' not in ident:
            if ident in BASIC_TYPE_NAMES:
                return Basic(ident)
            if ident == 'error':
                return error_type()
            if ident == 'any':
                return Interface()
            return self.named_type(self.package, ident)

        path, _, name = ident.rpartition('.')
        if not path or not name or '/' in name:
            raise TypeSyntaxError(f'Malformed qualified name {ident!r}')
        return self.named_type(self.package_for(path), name)

    def named_type(self, package: Optional[Package], name: str) -> Named:
        """Get the shared Named node for a type declared in ``package``."""
        key = (package.path if package is not None else '', name)
        named = self.named.get(key)
        if named is None:
            named = Named(name=name, package=package)
            self.named[key] = named
        return named


class TypeParser:
    """
    Recursive descent parser for Go type expressions.

    Parses a stream of tokens into a type expression tree.
    """

    def __init__(self, tokens: List[Token], scope: Optional[TypeScope] = None, source: str = ''):
        self.tokens = tokens
        self.pos = 0
        self.scope = scope or TypeScope()
        self.source = source

    def peek(self, offset: int = 0) -> Token:
        """Look ahead in the token stream without consuming."""
        pos = self.pos + offset
        if pos >= len(self.tokens):
            return self.tokens[-1]  # Return EOF
        return self.tokens[pos]

    def current(self) -> Token:
        """Return the current token."""
        return self.peek()

    def advance(self) -> Token:
        """Consume and return the current token."""
        token = self.current()
        self.pos += 1
        return token

    def match(self, *types: TokenType) -> bool:
        """Check if current token matches any of the given types."""
        return self.current().type in types

    def expect(self, token_type: TokenType, message: str = '') -> Token:
        """Consume the current token if it matches, otherwise raise an error."""
        if self.current().type != token_type:
            raise self.error(
                f'Expected {token_type.name} but got {self.current().type.name}'
                + (f': {message}' if message else '')
            )
        return self.advance()

    def error(self, message: str) -> TypeSyntaxError:
        token = self.current()
        return TypeSyntaxError(message, self.source, token.line, token.column)

    def skip_semicolons(self) -> None:
        while self.match(TokenType.SEMICOLON):
            self.advance()

    # =========================================================================
    # ENTRY POINTS
    # =========================================================================

    def parse(self) -> TypeExpr:
        """Parse a complete type expression."""
        typ = self.parse_type()
        self.skip_semicolons()
        self.expect(TokenType.EOF, 'trailing input after type')
        return typ

    def parse_parameter_type(self) -> Tuple[TypeExpr, bool]:
        """Parse a method parameter type, which may be variadic (...T)."""
        variadic = False
        if self.match(TokenType.ELLIPSIS):
            self.advance()
            variadic = True
            typ: TypeExpr = Slice(self.parse_type())
        else:
            typ = self.parse_type()
        self.skip_semicolons()
        self.expect(TokenType.EOF, 'trailing input after type')
        return typ, variadic

    # =========================================================================
    # TYPES
    # =========================================================================

    def parse_type(self) -> TypeExpr:
        """Parse a single type."""
        if self.match(TokenType.STAR):
            self.advance()
            return Pointer(self.parse_type())

        if self.match(TokenType.LBRACKET):
            self.advance()
            if self.match(TokenType.RBRACKET):
                self.advance()
                return Slice(self.parse_type())
            length = int(self.expect(TokenType.NUMBER, 'array length').value)
            self.expect(TokenType.RBRACKET)
            return Array(length, self.parse_type())

        if self.match(TokenType.MAP):
            self.advance()
            self.expect(TokenType.LBRACKET)
            key = self.parse_type()
            self.expect(TokenType.RBRACKET)
            return Map(key, self.parse_type())

        if self.match(TokenType.CHAN):
            self.advance()
            if self.match(TokenType.ARROW):
                self.advance()
                return Chan(self.parse_type(), ChanDir.SEND_ONLY)
            return Chan(self.parse_type(), ChanDir.SEND_RECV)

        if self.match(TokenType.ARROW):
            self.advance()
            self.expect(TokenType.CHAN, 'receive-only channel')
            return Chan(self.parse_type(), ChanDir.RECV_ONLY)

        if self.match(TokenType.FUNC):
            self.advance()
            return self.parse_signature()

        if self.match(TokenType.STRUCT):
            return self.parse_struct()

        if self.match(TokenType.INTERFACE):
            return self.parse_interface()

        if self.match(TokenType.LPAREN):
            self.advance()
            typ = self.parse_type()
            self.expect(TokenType.RPAREN)
            return typ

        if self.match(TokenType.IDENTIFIER):
            token = self.advance()
            try:
                return self.scope.lookup(token.value)
            except TypeSyntaxError as e:
                raise TypeSyntaxError(str(e), self.source, token.line, token.column) from e

        raise self.error(f'Expected a type but got {self.current().type.name}')

    # =========================================================================
    # SIGNATURES
    # =========================================================================

    def parse_signature(self) -> Signature:
        """Parse the parameters and results following 'func' or a method name."""
        params, variadic = self.parse_parameters()
        results = self.parse_results()
        return Signature(params=params, results=results, variadic=variadic)

    def parse_parameters(self, allow_variadic: bool = True) -> Tuple[List[Var], bool]:
        """Parse a parenthesized parameter list.

        Go lets either every entry carry a name or none of them. In the
        named form a run of bare names shares the type that follows it.
        """
        self.expect(TokenType.LPAREN)
        entries: List[Tuple[Optional[str], Optional[TypeExpr], bool]] = []
        variadic = False

        while not self.match(TokenType.RPAREN):
            name = None
            if self.match(TokenType.IDENTIFIER) and self.peek(1).type in TYPE_START | {TokenType.ELLIPSIS}:
                name = self.advance().value

            if self.match(TokenType.ELLIPSIS):
                if not allow_variadic:
                    raise self.error('Unexpected ... in result list')
                self.advance()
                entries.append((name, Slice(self.parse_type()), True))
                variadic = True
            elif name is None and self.match(TokenType.IDENTIFIER):
                # Either a type or a name awaiting the next entry's type
                token = self.current()
                entries.append((token.value, None, False))
                self.advance()
            else:
                entries.append((name, self.parse_type(), False))

            if self.match(TokenType.COMMA):
                self.advance()
                continue
            break

        self.expect(TokenType.RPAREN)

        if variadic and not entries[-1][2]:
            raise self.error('Only the final parameter can be variadic')

        return self._resolve_entries(entries), variadic

    def _resolve_entries(self, entries) -> List[Var]:
        named_form = any(name is not None and typ is not None for name, typ, _ in entries)
        if not named_form:
            params = []
            for name, typ, _ in entries:
                if typ is None:
                    typ = self.scope.lookup(name)
                params.append(Var(name='', type=typ))
            return params

        params: List[Var] = []
        pending: List[str] = []
        for name, typ, _ in entries:
            if typ is None:
                pending.append(name)
                continue
            if name is None:
                raise self.error('Mixed named and unnamed parameters')
            for pending_name in pending:
                params.append(Var(name=pending_name, type=typ))
            pending = []
            params.append(Var(name=name, type=typ))
        if pending:
            raise self.error('Mixed named and unnamed parameters')
        return params

    def parse_results(self) -> List[Var]:
        """Parse the optional result list of a signature."""
        if self.match(TokenType.LPAREN):
            results, _ = self.parse_parameters(allow_variadic=False)
            return results
        if self.current().type in TYPE_START:
            return [Var(name='', type=self.parse_type())]
        return []

    # =========================================================================
    # STRUCTS AND INTERFACES
    # =========================================================================

    def parse_struct(self) -> Struct:
        """Parse struct{...}. Tags are accepted and dropped."""
        self.expect(TokenType.STRUCT)
        self.expect(TokenType.LBRACE)
        fields: List[Field] = []

        self.skip_semicolons()
        while not self.match(TokenType.RBRACE):
            if self.match(TokenType.STAR) or (
                self.match(TokenType.IDENTIFIER)
                and self.peek(1).type in (TokenType.SEMICOLON, TokenType.RBRACE, TokenType.STRING_LITERAL)
            ):
                typ = self.parse_type()
                fields.append(Field(name=getattr(typ, 'name', ''), type=typ, embedded=True))
            else:
                names = [self.expect(TokenType.IDENTIFIER, 'field name').value]
                while self.match(TokenType.COMMA):
                    self.advance()
                    names.append(self.expect(TokenType.IDENTIFIER, 'field name').value)
                typ = self.parse_type()
                fields.extend(Field(name=name, type=typ) for name in names)

            if self.match(TokenType.STRING_LITERAL):
                self.advance()
            if not self.match(TokenType.RBRACE):
                self.expect(TokenType.SEMICOLON, 'between struct fields')
            self.skip_semicolons()

        self.expect(TokenType.RBRACE)
        return Struct(fields=fields)

    def parse_interface(self) -> Interface:
        """Parse interface{...}."""
        self.expect(TokenType.INTERFACE)
        self.expect(TokenType.LBRACE)
        iface = Interface()

        self.skip_semicolons()
        while not self.match(TokenType.RBRACE):
            if self.match(TokenType.IDENTIFIER) and self.peek(1).type == TokenType.LPAREN:
                name = self.advance().value
                sig = self.parse_signature()
                iface.methods.append(Method(
                    name=name, params=sig.params, results=sig.results, variadic=sig.variadic,
                ))
            else:
                embedded = self.parse_type()
                if isinstance(embedded, Interface):
                    iface.methods.extend(embedded.methods)
                    iface.embedded.extend(embedded.embedded)
                else:
                    iface.embedded.append(embedded)

            if not self.match(TokenType.RBRACE):
                self.expect(TokenType.SEMICOLON, 'between interface methods')
            self.skip_semicolons()

        self.expect(TokenType.RBRACE)
        return iface


def parse_type(text: str, scope: Optional[TypeScope] = None) -> TypeExpr:
    """Parse a type expression string."""
    parser = TypeParser(Lexer(text).tokenize(), scope, source=text)
    return parser.parse()


def parse_parameter_type(text: str, scope: Optional[TypeScope] = None) -> Tuple[TypeExpr, bool]:
    """Parse a parameter type string, reporting whether it was written as ...T."""
    parser = TypeParser(Lexer(text).tokenize(), scope, source=text)
    return parser.parse_parameter_type()
