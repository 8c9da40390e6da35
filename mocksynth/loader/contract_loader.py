"""
Contract loading from JSON descriptions.

A description file declares one Go package, the underlying form of any
named types whose nilability matters, and the interfaces to mock:

    {
      "package": {"path": "github.com/acme/fetch", "name": "fetch"},
      "packages": {"gopkg.in/yaml.v2": "yaml"},
      "types": {"Handler": "func(string) error"},
      "interfaces": [
        {"name": "Fetcher", "methods": [
          {"name": "Get",
           "params": [{"name": "path", "type": "string"}],
           "results": [{"type": "foreign/pkg.Response"}, {"type": "error"}]}
        ]}
      ]
    }
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

from .errors import ContractLoadError, TypeSyntaxError
from .type_parser import TypeScope, parse_parameter_type, parse_type, default_package_name
from ..model import Contract, Method, Named, Package, Var


class ContractLoader:
    """
    Builds contracts from JSON descriptions.

    Each loaded description gets its own TypeScope, so named types are
    shared within a file and never across files.
    """

    def load_file(self, filepath: str) -> List[Contract]:
        """Load every contract declared in a description file."""
        try:
            with open(filepath, 'r') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ContractLoadError(f'{filepath}: invalid JSON: {e}') from e
        except OSError as e:
            raise ContractLoadError(f'{filepath}: {e}') from e

        try:
            return self.load_data(data)
        except ContractLoadError as e:
            raise ContractLoadError(f'{filepath}: {e}') from e

    def load_string(self, source: str) -> List[Contract]:
        """Load every contract declared in a JSON string."""
        try:
            data = json.loads(source)
        except json.JSONDecodeError as e:
            raise ContractLoadError(f'invalid JSON: {e}') from e
        return self.load_data(data)

    def load_data(self, data: Dict[str, Any]) -> List[Contract]:
        """Load every contract declared in a decoded description."""
        if not isinstance(data, dict):
            raise ContractLoadError('description must be a JSON object')

        package = self._load_package(data.get('package'))
        scope = TypeScope(package, data.get('packages') or {})

        self._declare_types(scope, data.get('types') or {})

        contracts = []
        for entry in data.get('interfaces') or []:
            contracts.append(self._load_interface(scope, package, entry))
        return contracts

    # =========================================================================
    # HELPERS
    # =========================================================================

    def _load_package(self, entry: Optional[Dict[str, str]]) -> Package:
        if not entry or not entry.get('path'):
            raise ContractLoadError('description needs a package with a path')
        path = entry['path']
        return Package(path=path, name=entry.get('name') or default_package_name(path))

    def _declare_types(self, scope: TypeScope, types: Dict[str, str]) -> None:
        """Attach underlying types to named types.

        Every name is registered before any definition is parsed so that
        definitions can refer to each other and to themselves.
        """
        declared: Dict[str, Named] = {}
        for name in types:
            named = scope.lookup(name)
            if not isinstance(named, Named):
                raise ContractLoadError(f'cannot redefine predeclared type {name!r}')
            declared[name] = named

        for name, definition in types.items():
            underlying = self._parse(scope, definition, f'type {name}')
            declared[name].underlying = underlying

        # A definition naming another named type shares its underlying type
        for named in declared.values():
            seen = set()
            while isinstance(named.underlying, Named) and id(named.underlying) not in seen:
                seen.add(id(named.underlying))
                named.underlying = named.underlying.underlying

    def _load_interface(self, scope: TypeScope, package: Package, entry: Dict[str, Any]) -> Contract:
        name = entry.get('name')
        if not name:
            raise ContractLoadError('interface without a name')

        methods = [self._load_method(scope, name, m) for m in entry.get('methods') or []]
        return Contract(name=name, package=package, methods=methods)

    def _load_method(self, scope: TypeScope, interface: str, entry: Dict[str, Any]) -> Method:
        name = entry.get('name')
        if not name:
            raise ContractLoadError(f'method without a name in interface {interface}')
        where = f'{interface}.{name}'

        params = []
        variadic = bool(entry.get('variadic', False))
        raw_params = entry.get('params') or []
        for i, p in enumerate(raw_params):
            try:
                typ, dotted = parse_parameter_type(self._type_of(p, where), scope)
            except TypeSyntaxError as e:
                raise ContractLoadError(f'{where}: {e}') from e
            if dotted:
                if i != len(raw_params) - 1:
                    raise ContractLoadError(f'{where}: only the final parameter can be variadic')
                variadic = True
            params.append(Var(name=self._name_of(p), type=typ))

        if variadic and not params:
            raise ContractLoadError(f'{where}: variadic method without parameters')

        results = [
            Var(name=self._name_of(r), type=self._parse(scope, self._type_of(r, where), where))
            for r in entry.get('results') or []
        ]
        return Method(name=name, params=params, results=results, variadic=variadic)

    def _name_of(self, entry: Any) -> str:
        if isinstance(entry, dict):
            return entry.get('name') or ''
        return ''

    def _type_of(self, entry: Any, where: str) -> str:
        if isinstance(entry, str):
            return entry
        if isinstance(entry, dict) and isinstance(entry.get('type'), str):
            return entry['type']
        raise ContractLoadError(f'{where}: parameter or result needs a type string')

    def _parse(self, scope: TypeScope, text: str, where: str):
        try:
            return parse_type(text, scope)
        except TypeSyntaxError as e:
            raise ContractLoadError(f'{where}: {e}') from e


def load_contracts_from_directory(directory: str, pattern: str = '**/*.json') -> List[Contract]:
    """Load the contracts of every description file under a directory."""
    loader = ContractLoader()
    contracts = []
    for path in sorted(Path(directory).glob(pattern)):
        contracts.extend(loader.load_file(str(path)))
    return contracts
