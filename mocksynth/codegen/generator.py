"""
Mock generation for one contract.

The MockGenerator owns a fresh GenerationContext, drives the renderer and
the synthesizer over it, and flushes the buffer through the finishing
pass once everything has been written.
"""

from typing import Optional, Sequence, TextIO

from ..model import Contract
from .context import DEFAULT_MOCK_IMPORT_PATH, GenerationContext
from .diagnostics import GeneratorDiagnostics
from .errors import NotSetupError
from .formatter import PassthroughFormatter
from .synthesizer import DeclarationSynthesizer
from .type_renderer import TypeRenderer


VERSION = '1.0.0'


class MockGenerator:
    """Generates the Go source file holding the mock of one contract."""

    def __init__(
        self,
        contract: Optional[Contract],
        package_name: str = 'mocks',
        in_package: bool = False,
        source_roots: Optional[Sequence[str]] = None,
        diagnostics: Optional[GeneratorDiagnostics] = None,
        formatter=None,
        mock_import_path: str = DEFAULT_MOCK_IMPORT_PATH,
    ):
        self._ctx = GenerationContext.for_contract(
            contract,
            package_name=package_name,
            in_package=in_package,
            source_roots=source_roots,
            diagnostics=diagnostics,
            mock_import_path=mock_import_path,
        )
        self._renderer = TypeRenderer(self._ctx)
        self._synthesizer = DeclarationSynthesizer(self._ctx, self._renderer)
        self._formatter = formatter or PassthroughFormatter()

    @property
    def context(self) -> GenerationContext:
        return self._ctx

    @property
    def renderer(self) -> TypeRenderer:
        return self._renderer

    @property
    def mock_name(self) -> str:
        return self._synthesizer.mock_name

    @property
    def source(self) -> str:
        """The raw, unformatted text generated so far."""
        return self._ctx.getvalue()

    # =========================================================================
    # GENERATION
    # =========================================================================

    def generate_prologue_note(self, note: str = '') -> None:
        """Write the generated-code marker and an optional note.

        The note is split into comment lines on literal '\\n' sequences.
        """
        self._ctx.write(f'// Code generated by mocksynth v{VERSION}. DO NOT EDIT.\n')
        if note:
            self._ctx.write('\n')
            for n in note.split('\\n'):
                self._ctx.write(f'// {n}\n')
        self._ctx.write('\n')

    def generate_prologue(self) -> None:
        """Write the package clause and the import block."""
        contract = self._synthesizer.contract
        self._synthesizer.populate_imports()

        if self._ctx.in_package:
            self._ctx.write(f'package {contract.package.name}\n\n')
            imports = self._ctx.imports.generate(exclude_path=contract.package.path)
        else:
            self._ctx.write(f'package {self._ctx.package_name}\n\n')
            imports = self._ctx.imports.generate()

        if imports:
            self._ctx.write(imports)
            self._ctx.write('\n')

    def generate(self) -> str:
        """Write the mock declarations. Returns the text written."""
        if self._ctx.contract is None:
            raise NotSetupError()
        return self._synthesizer.synthesize()

    def render(self, note: str = '') -> str:
        """Generate the whole file and return it after the finishing pass."""
        self.generate_prologue_note(note)
        self.generate_prologue()
        self.generate()
        return self.finish()

    # =========================================================================
    # OUTPUT
    # =========================================================================

    def finish(self) -> str:
        """Run the finishing pass over the buffer."""
        return self._formatter.format(self.source, f'{self.mock_name}.go')

    def write(self, stream: TextIO) -> None:
        """Run the finishing pass and write the result to ``stream``."""
        stream.write(self.finish())
