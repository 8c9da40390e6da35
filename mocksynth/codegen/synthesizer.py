"""
Declaration synthesis for generated mocks.

This module turns a contract's method set into Go declarations: the mock
type embedding the call ledger, a forwarding method per contract method,
and a typed expectation builder that registers calls on the same ledger.
"""

from dataclasses import dataclass, field
from typing import List, TYPE_CHECKING

if TYPE_CHECKING:
    from .context import GenerationContext
    from .type_renderer import TypeRenderer

from .base import BaseGenerator
from .errors import NotSetupError
from .naming import mock_name, param_name_collides
from .type_renderer import is_empty_interface, is_error_type, is_nillable
from ..model import Contract, Method, Var


@dataclass
class ParamList:
    """Rendered parameters or results of one method."""
    names: List[str] = field(default_factory=list)
    types: List[str] = field(default_factory=list)
    params: List[str] = field(default_factory=list)
    nilable: List[bool] = field(default_factory=list)
    errors: List[bool] = field(default_factory=list)
    variadic: bool = False
    # The variadic elements are already interface{} values
    variadic_is_interface: bool = False

    def formatted_names(self) -> str:
        """Argument names as passed on, with the variadic one expanded."""
        names = []
        for name, typ in zip(self.names, self.types):
            if typ.startswith('...'):
                name += '...'
            names.append(name)
        return ', '.join(names)

    def formatted_declarations(self) -> str:
        """'name type' pairs, used for the ToReturn parameter list."""
        return ', '.join(f'{name} {typ}' for name, typ in zip(self.names, self.types))


class DeclarationSynthesizer(BaseGenerator):
    """
    Emits the mock declarations for a contract.

    This class handles:
    - The mock struct and the expectation builder entry point
    - Forwarding methods that record calls and extract configured results
    - Per-method expectation types with a ToReturn helper
    - Flattening variadic arguments into individually matched values
    """

    def __init__(self, ctx: 'GenerationContext', renderer: 'TypeRenderer'):
        """
        Initialize the synthesizer.

        Args:
            ctx: The code generation context
            renderer: The type renderer bound to the same context
        """
        super().__init__(ctx)
        self._renderer = renderer

    @property
    def contract(self) -> Contract:
        if self._ctx.contract is None:
            raise NotSetupError()
        return self._ctx.contract

    @property
    def mock_name(self) -> str:
        return mock_name(self.contract, self._ctx.in_package)

    @property
    def expectation_name(self) -> str:
        return self.mock_name + 'Expectation'

    # =========================================================================
    # MAIN ENTRY POINTS
    # =========================================================================

    def populate_imports(self) -> None:
        """Render every type once so all aliases are bound before naming params."""
        if self._ctx.imports_populated:
            return
        for method in self.contract.methods:
            self._ctx.current_method = method.name
            for v in method.params + method.results:
                self._renderer.render(v.type)
        self._ctx.current_method = ''
        self._ctx.imports_populated = True

    def synthesize(self) -> str:
        """Write the mock declarations into the buffer.

        Returns:
            The text written by this call
        """
        contract = self.contract
        self.populate_imports()
        start = len(self._ctx.getvalue())

        mock = self.mock_name
        expectation = self.expectation_name
        ledger = self._ctx.ledger_alias

        self.line(f'// {mock} is an autogenerated mock type for the {contract.name} type')
        self.line(f'type {mock} struct {{')
        self.line(f'\t{ledger}.Mock')
        self.line('}')
        self.line()
        self.line(f'type {expectation} struct {{')
        self.line(f'\tmock *{ledger}.Mock')
        self.line('}')
        self.line()
        self.line(f'func (_m *{mock}) Expect() *{expectation} {{')
        self.line(f'\treturn &{expectation}{{mock: &_m.Mock}}')
        self.line('}')

        for method in contract.methods:
            self.line()
            self._ctx.current_method = method.name
            params = self.build_param_list(method.params, method.variadic)
            returns = self.build_param_list(method.results)
            self.mock_method(method, params, returns)
            self.mock_method_expectation(method, params, returns)
        self._ctx.current_method = ''

        return self._ctx.getvalue()[start:]

    # =========================================================================
    # PARAMETER LISTS
    # =========================================================================

    def build_param_list(self, items: List[Var], variadic: bool = False) -> ParamList:
        """Render names and types of a parameter or result list."""
        params = ParamList()

        for i, v in enumerate(items):
            if variadic and i == len(items) - 1:
                ts = self._renderer.render_variadic(v.type)
                params.variadic = True
                params.variadic_is_interface = is_empty_interface(v.type.elem)
            else:
                ts = self._renderer.render(v.type)

            name = v.name
            if not name or param_name_collides(name, self._ctx.package_name, self._ctx.imports):
                name = f'_a{i}'

            params.names.append(name)
            params.types.append(ts)
            params.params.append(f'{name} {ts}')
            params.nilable.append(is_nillable(v.type))
            params.errors.append(is_error_type(v.type))

        return params

    # =========================================================================
    # FORWARDING METHOD
    # =========================================================================

    def mock_method(self, method: Method, params: ParamList, returns: ParamList) -> None:
        """Write the method on the mock type that forwards to the ledger."""
        fname = method.name
        if params.names:
            self.line(f'// {fname} provides a mock function with given fields: {", ".join(params.names)}')
        else:
            self.line(f'// {fname} provides a mock function with given fields:')

        if not returns.types:
            result = ''
        elif len(returns.types) == 1:
            result = ' ' + returns.types[0]
        else:
            result = f' ({", ".join(returns.types)})'
        self.line(f'func (_m *{self.mock_name}) {fname}({", ".join(params.params)}){result} {{')
        self.indent_level += 1

        formatted = params.formatted_names()
        called = self._ledger_invocation('_m.Called', params, formatted)

        if not returns.types:
            self.line(called)
        else:
            self.line(f'ret := {called}')
            self.line()
            results = []
            for idx, typ in enumerate(returns.types):
                self._extract_result(idx, typ, params, returns, formatted)
                results.append(f'r{idx}')
            self.line(f'return {", ".join(results)}')

        self.indent_level -= 1
        self.line('}')
        self.line()

    def _extract_result(
        self,
        idx: int,
        typ: str,
        params: ParamList,
        returns: ParamList,
        formatted: str,
    ) -> None:
        """Write the code that fills result slot ``idx``."""
        self.line(f'var r{idx} {typ}')
        self.line(f'if rf, ok := ret.Get({idx}).(func({", ".join(params.types)}) {typ}); ok {{')
        self.line(f'\tr{idx} = rf({formatted})')
        self.line('} else {')
        if returns.errors[idx]:
            self.line(f'\tr{idx} = ret.Error({idx})')
        elif returns.nilable[idx]:
            self.line(f'\tif ret.Get({idx}) != nil {{')
            self.line(f'\t\tr{idx} = ret.Get({idx}).({typ})')
            self.line('\t}')
        else:
            self.line(f'\tr{idx} = ret.Get({idx}).({typ})')
        self.line('}')
        self.line()

    # =========================================================================
    # EXPECTATIONS
    # =========================================================================

    def mock_method_expectation(self, method: Method, params: ParamList, returns: ParamList) -> None:
        """Write the expectation type, its builder method and ToReturn."""
        fname = method.name
        method_expectation = self.mock_name + fname + 'Expectation'
        ledger = self._ctx.ledger_alias

        self.line(f'type {method_expectation} struct {{')
        self.line(f'\tcall *{ledger}.Call')
        self.line('}')
        self.line()

        self.line(
            f'func (_e *{self.expectation_name}) {fname}({", ".join(params.params)}) '
            f'*{method_expectation} {{'
        )
        self.indent_level += 1
        call = self._ledger_invocation(
            '_e.mock.On', params, params.formatted_names(), label=f'"{fname}"'
        )
        self.line(f'return &{method_expectation}{{')
        self.line(f'\tcall: {call},')
        self.line('}')
        self.indent_level -= 1
        self.line('}')
        self.line()

        self.line(
            f'func (_e *{method_expectation}) ToReturn({returns.formatted_declarations()}) '
            f'*{ledger}.Call {{'
        )
        self.line(f'\treturn _e.call.Return({", ".join(returns.names)})')
        self.line('}')

    # =========================================================================
    # LEDGER ARGUMENTS
    # =========================================================================

    def _ledger_invocation(
        self,
        target: str,
        params: ParamList,
        formatted: str,
        label: str = '',
    ) -> str:
        """Build a ledger call, writing any argument preparation it needs.

        Variadic arguments are mirrored one value per argument so that
        recorded calls and registered expectations have the same shape.
        """
        args = [label] if label else []

        if not params.names:
            return f'{target}({", ".join(args)})'

        if not params.variadic:
            return f'{target}({", ".join(args + [formatted])})'

        variadic_args = self._varargs(params)
        self.line('var _ca []interface{}')
        if len(params.names) > 1:
            self.line(f'_ca = append(_ca, {", ".join(params.names[:-1])})')
        self.line(f'_ca = append(_ca, {variadic_args}...)')
        return f'{target}({", ".join(args + ["_ca..."])})'

    def _varargs(self, params: ParamList) -> str:
        """Return the name of an interface{} slice holding the variadic values."""
        variadic_name = params.names[-1]
        if params.variadic_is_interface:
            return variadic_name

        # A []T cannot be appended to []interface{} directly
        self.line(f'_va := make([]interface{{}}, len({variadic_name}))')
        self.line(f'for _i := range {variadic_name} {{')
        self.line(f'\t_va[_i] = {variadic_name}[_i]')
        self.line('}')
        return '_va'
