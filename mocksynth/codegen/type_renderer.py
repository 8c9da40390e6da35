"""
Type rendering for generated mocks.

This module provides the TypeRenderer class that turns type expression
trees into Go source text, binding an import alias for every package a
named type comes from.
"""

from typing import List, TYPE_CHECKING

if TYPE_CHECKING:
    from .context import GenerationContext

from .base import BaseGenerator
from .errors import InlineInterfaceError, MockGenerationError, VariadicTypeError
from ..model import (
    TypeExpr,
    Basic,
    Named,
    Pointer,
    Array,
    Slice,
    Map,
    Chan,
    ChanDir,
    Signature,
    Struct,
    Interface,
    Var,
)


EMPTY_INTERFACE = 'interface{}'

# Types whose zero value is nil
NILLABLE_TYPES = (Pointer, Array, Map, Interface, Signature, Chan, Slice)


def is_nillable(typ: TypeExpr) -> bool:
    """Check if a type's absent state is representable.

    Named types are classified by their underlying type.
    """
    seen = set()
    while isinstance(typ, Named):
        if typ.underlying is None or id(typ) in seen:
            return False
        seen.add(id(typ))
        typ = typ.underlying
    return isinstance(typ, NILLABLE_TYPES)


def is_error_type(typ: TypeExpr) -> bool:
    """Check if a type is the predeclared error type."""
    return isinstance(typ, Named) and typ.name == 'error' and typ.package is None


def is_empty_interface(typ: TypeExpr) -> bool:
    return isinstance(typ, Interface) and typ.is_empty


class TypeRenderer(BaseGenerator):
    """
    Renders type expressions as Go source.

    This class provides:
    - Structural rendering of every type expression variant
    - Import alias binding for named types from other packages
    - Rejection of inline interfaces that declare methods
    """

    def __init__(self, ctx: 'GenerationContext'):
        """
        Initialize the type renderer.

        Args:
            ctx: The code generation context
        """
        super().__init__(ctx)

    # =========================================================================
    # MAIN TYPE RENDERING
    # =========================================================================

    def render(self, typ: TypeExpr) -> str:
        """Render a type expression.

        Args:
            typ: The type expression node to render

        Returns:
            The Go type string
        """
        if isinstance(typ, Named):
            return self._render_named(typ)
        if isinstance(typ, Basic):
            return typ.name
        if isinstance(typ, Pointer):
            return '*' + self.render(typ.elem)
        if isinstance(typ, Slice):
            return '[]' + self.render(typ.elem)
        if isinstance(typ, Array):
            return f'[{typ.length}]{self.render(typ.elem)}'
        if isinstance(typ, Signature):
            return self._render_signature(typ)
        if isinstance(typ, Map):
            return f'map[{self.render(typ.key)}]{self.render(typ.value)}'
        if isinstance(typ, Chan):
            return self._render_chan(typ)
        if isinstance(typ, Struct):
            fields = []
            for f in typ.fields:
                if f.embedded:
                    fields.append(self.render(f.type))
                else:
                    fields.append(f'{f.name} {self.render(f.type)}')
            return 'struct{' + ';'.join(fields) + '}'
        if isinstance(typ, Interface):
            if not typ.is_empty:
                names = [m.name + '()' for m in typ.methods]
                names += [getattr(e, 'name', type(e).__name__) for e in typ.embedded]
                raise InlineInterfaceError(
                    'interface{' + '; '.join(names) + '}', self._ctx.current_method
                )
            return EMPTY_INTERFACE
        raise MockGenerationError(f'un-namable type: {typ!r}')

    def render_tuple(self, items: List[Var], variadic: bool = False) -> str:
        """Render the types of a parameter or result list joined by ' , '.

        The final element of a variadic list is rendered as ...T.
        """
        parts = []
        for i, v in enumerate(items):
            if variadic and i == len(items) - 1:
                parts.append(self.render_variadic(v.type))
            else:
                parts.append(self.render(v.type))
        return ' , '.join(parts)

    def render_variadic(self, typ: TypeExpr) -> str:
        """Render the type of a variadic parameter as ...T."""
        if not isinstance(typ, Slice):
            raise VariadicTypeError(self.render(typ), self._ctx.current_method)
        return '...' + self.render(typ.elem)

    # =========================================================================
    # VARIANT HELPERS
    # =========================================================================

    def _render_named(self, typ: Named) -> str:
        """Render a named type, qualified with its package alias when foreign."""
        if self._is_local(typ):
            return typ.name
        return self._ctx.imports.bind_package(typ.package) + '.' + typ.name

    def _is_local(self, typ: Named) -> bool:
        package = typ.package
        if package is None or package.name == 'main':
            return True
        contract = self._ctx.contract
        return (
            self._ctx.in_package
            and contract is not None
            and package.path == contract.package.path
        )

    def _render_signature(self, typ: Signature) -> str:
        params = self.render_tuple(typ.params, typ.variadic)
        if not typ.results:
            return f'func({params})'
        if len(typ.results) == 1:
            return f'func({params}) {self.render(typ.results[0].type)}'
        return f'func({params})({self.render_tuple(typ.results)})'

    def _render_chan(self, typ: Chan) -> str:
        elem = self.render(typ.elem)
        if typ.direction == ChanDir.SEND_RECV:
            # chan <-chan T would parse as chan<- chan T
            if isinstance(typ.elem, Chan) and typ.elem.direction == ChanDir.RECV_ONLY:
                elem = f'({elem})'
            return 'chan ' + elem
        if typ.direction == ChanDir.RECV_ONLY:
            return '<-chan ' + elem
        return 'chan<- ' + elem
