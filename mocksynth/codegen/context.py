"""
Code generation context for the mock generator.

This module provides a context class that holds all state needed while a
single contract is turned into a mock, separating state management from
the generation logic. A context is never shared between contracts.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from ..model import Contract
from .diagnostics import GeneratorDiagnostics
from .imports import ImportRegistry


# Import path of the call ledger the generated mocks embed
DEFAULT_MOCK_IMPORT_PATH = 'github.com/stretchr/testify/mock'
DEFAULT_MOCK_PACKAGE_NAME = 'mock'


@dataclass
class GenerationContext:
    """
    Holds all state needed during mock generation for one contract.

    The import registry and the text buffer live here so that each
    generation unit starts empty and its output depends only on its
    contract.
    """

    contract: Optional[Contract] = None

    # Output package
    package_name: str = 'mocks'
    in_package: bool = False

    # Indentation state
    indent_level: int = 0
    indent_str: str = '\t'

    # Method currently being rendered, for error messages
    current_method: str = ''

    # Alias bound to the call ledger package
    ledger_alias: str = DEFAULT_MOCK_PACKAGE_NAME

    imports: ImportRegistry = field(default_factory=ImportRegistry)
    imports_populated: bool = False

    _buffer: List[str] = field(default_factory=list)
    _diagnostics: Optional[GeneratorDiagnostics] = None

    @property
    def diagnostics(self) -> GeneratorDiagnostics:
        """Get the diagnostics collector, creating one if needed."""
        if self._diagnostics is None:
            self._diagnostics = GeneratorDiagnostics()
        return self._diagnostics

    def indent(self) -> str:
        """Return the current indentation string."""
        return self.indent_str * self.indent_level

    def write(self, text: str) -> None:
        """Append raw text to the buffer."""
        self._buffer.append(text)

    def getvalue(self) -> str:
        """Return everything written so far."""
        return ''.join(self._buffer)

    @classmethod
    def for_contract(
        cls,
        contract: Optional[Contract],
        package_name: str = 'mocks',
        in_package: bool = False,
        source_roots: Optional[Sequence[str]] = None,
        diagnostics: Optional[GeneratorDiagnostics] = None,
        mock_import_path: str = DEFAULT_MOCK_IMPORT_PATH,
    ) -> 'GenerationContext':
        """
        Create a fresh context for one contract.

        Args:
            contract: The contract to mock
            package_name: Package clause used when generating out of package
            in_package: Generate into the contract's own package
            source_roots: Ordered roots used to localize absolute paths
            diagnostics: Shared diagnostics collector
            mock_import_path: Import path of the call ledger package

        Returns:
            A new GenerationContext with the ledger package already bound
        """
        diagnostics = diagnostics or GeneratorDiagnostics()
        ctx = cls(
            contract=contract,
            package_name=package_name,
            in_package=in_package,
            imports=ImportRegistry(source_roots, diagnostics=diagnostics),
            _diagnostics=diagnostics,
        )
        ctx.ledger_alias = ctx.imports.bind(mock_import_path, DEFAULT_MOCK_PACKAGE_NAME)
        return ctx
