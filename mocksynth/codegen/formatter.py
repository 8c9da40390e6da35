"""
Finishing pass for generated mocks.

The generated text is piped through gofmt or goimports, which both
normalize the layout and reject source that does not parse.
"""

import subprocess
import sys
from typing import List, Optional

from .errors import FormatError


SEPARATOR = '-' * 92


class PassthroughFormatter:
    """Returns the generated source unchanged."""

    def format(self, source: str, filename: str = 'mock.go') -> str:
        return source


class GoFormatter:
    """
    Runs a Go formatting tool over the generated source.

    The tool reads the source on stdin and writes the formatted source to
    stdout. A non-zero exit means the generated source is not valid Go.
    """

    def __init__(self, command: str = 'gofmt', args: Optional[List[str]] = None, stderr=None):
        """
        Initialize the formatter.

        Args:
            command: Executable to run (gofmt or goimports)
            args: Extra arguments passed to the executable
            stderr: Stream invalid source is echoed to (defaults to sys.stderr)
        """
        self.command = command
        self.args = list(args or [])
        self._stderr = stderr

    def format(self, source: str, filename: str = 'mock.go') -> str:
        """Format ``source``, raising FormatError if the tool rejects it."""
        try:
            result = subprocess.run(
                [self.command] + self.args,
                input=source,
                capture_output=True,
                text=True,
            )
        except OSError as e:
            raise FormatError(f'Unable to run {self.command}', source, str(e)) from e

        if result.returncode != 0:
            self._echo_invalid(source, filename)
            raise FormatError(f'{filename} generated by mocksynth is not valid Go', source, result.stderr)
        return result.stdout

    def _echo_invalid(self, source: str, filename: str) -> None:
        stream = self._stderr if self._stderr is not None else sys.stderr
        print(
            f'Between the lines is the file ({filename}) mocksynth generated in-memory '
            f'but detected as invalid:\n{SEPARATOR}\n{source}\n{SEPARATOR}',
            file=stream,
        )


FORMATTERS = ('gofmt', 'goimports', 'none')


def get_formatter(name: str):
    """Get the finishing pass for a configured formatter name."""
    if name == 'none':
        return PassthroughFormatter()
    if name in ('gofmt', 'goimports'):
        return GoFormatter(name)
    raise ValueError(f'Unknown formatter: {name} (expected one of {", ".join(FORMATTERS)})')
