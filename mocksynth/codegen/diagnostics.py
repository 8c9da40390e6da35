"""
Diagnostic/warning system for the mock generator.

Collects and reports warnings about inputs that were degraded during
generation (such as import paths that could not be localized) and the
outcome of each contract in a batch run.
"""

import sys
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional


class DiagnosticSeverity(Enum):
    """Severity levels for generator diagnostics."""
    ERROR = 'error'
    WARNING = 'warning'
    INFO = 'info'


@dataclass
class Diagnostic:
    """A single diagnostic message."""
    severity: DiagnosticSeverity
    code: str
    message: str
    subject: str = ''  # interface name or path the message is about
    construct: str = ''  # e.g., 'import path', 'generation'

    def __str__(self) -> str:
        if self.subject:
            return f'[{self.severity.value}] {self.subject}: {self.message} ({self.code})'
        return f'[{self.severity.value}] {self.message} ({self.code})'


class GeneratorDiagnostics:
    """
    Collects generator diagnostics during a run.

    Usage:
        diag = GeneratorDiagnostics()
        diag.warn_unlocalized_path("/go/src/x", "/go/src", "path is on another drive")
        # ... after generation ...
        diag.print_summary()
    """

    def __init__(self, verbose: bool = False):
        self._diagnostics: List[Diagnostic] = []
        self._verbose = verbose

    @property
    def diagnostics(self) -> List[Diagnostic]:
        """Get all collected diagnostics."""
        return list(self._diagnostics)

    @property
    def errors(self) -> List[Diagnostic]:
        """Get only error-level diagnostics."""
        return [d for d in self._diagnostics if d.severity == DiagnosticSeverity.ERROR]

    @property
    def warnings(self) -> List[Diagnostic]:
        """Get only warning-level diagnostics."""
        return [d for d in self._diagnostics if d.severity == DiagnosticSeverity.WARNING]

    @property
    def count(self) -> int:
        """Get total diagnostic count."""
        return len(self._diagnostics)

    def clear(self) -> None:
        """Clear all diagnostics."""
        self._diagnostics.clear()

    # =========================================================================
    # SPECIFIC DIAGNOSTIC METHODS
    # =========================================================================

    def warn_unlocalized_path(self, path: str, root: str, reason: str) -> None:
        """Warn that an absolute path could not be made relative to a root."""
        self._diagnostics.append(Diagnostic(
            severity=DiagnosticSeverity.WARNING,
            code='W001',
            message=f'Unable to localize path relative to {root}: {reason}',
            subject=path,
            construct='import path',
        ))

    def error_generation_failed(self, interface_name: str, error: Exception) -> None:
        """Record that a contract could not be mocked."""
        self._diagnostics.append(Diagnostic(
            severity=DiagnosticSeverity.ERROR,
            code='E001',
            message=f'{type(error).__name__}: {error}',
            subject=interface_name,
            construct='generation',
        ))

    def error_load_failed(self, path: str, error: Exception) -> None:
        """Record that a contract description could not be loaded."""
        self._diagnostics.append(Diagnostic(
            severity=DiagnosticSeverity.ERROR,
            code='E002',
            message=str(error),
            subject=path,
            construct='loading',
        ))

    def info_mock_written(self, interface_name: str, destination: str) -> None:
        """Info that a mock was handed to the output sink."""
        self._diagnostics.append(Diagnostic(
            severity=DiagnosticSeverity.INFO,
            code='I001',
            message=f'Mock written to {destination}',
            subject=interface_name,
            construct='output',
        ))

    # =========================================================================
    # REPORTING
    # =========================================================================

    def print_summary(self, file=None) -> None:
        """Print a summary of all diagnostics to stderr (or specified file)."""
        if file is None:
            file = sys.stderr

        if not self._diagnostics:
            return

        errors = self.errors
        warnings = self.warnings
        infos = [d for d in self._diagnostics if d.severity == DiagnosticSeverity.INFO]

        if errors:
            print(f'\nGenerator errors ({len(errors)}):', file=file)
            for d in errors:
                print(f'  {d}', file=file)

        if warnings:
            print(f'\nGenerator warnings ({len(warnings)}):', file=file)
            by_construct: dict = {}
            for w in warnings:
                by_construct.setdefault(w.construct or 'other', []).append(w)

            for construct, diags in sorted(by_construct.items()):
                print(f'  {construct}: {len(diags)} occurrence(s)', file=file)
                if self._verbose:
                    for d in diags:
                        print(f'    {d}', file=file)

        if infos and self._verbose:
            print(f'\nGenerator info ({len(infos)}):', file=file)
            for d in infos:
                print(f'  {d}', file=file)

    def get_summary(self, subject: Optional[str] = None) -> str:
        """Get a summary string of all errors and warnings."""
        relevant = [
            d for d in self._diagnostics
            if d.severity != DiagnosticSeverity.INFO
            and (subject is None or d.subject == subject)
        ]
        if not relevant:
            return 'No generator warnings.'

        by_construct: dict = {}
        for d in relevant:
            key = d.construct or 'other'
            by_construct[key] = by_construct.get(key, 0) + 1

        parts = [f'{count} {construct}' for construct, count in sorted(by_construct.items())]
        return f'Generator warnings: {", ".join(parts)}'
