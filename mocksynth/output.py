"""
Output sinks for generated mocks.

A sink receives a finished generator and decides where its text goes:
standard output, or one file per mock in an output directory.
"""

import sys
from pathlib import Path

from .codegen.generator import MockGenerator
from .codegen.naming import underscore_case


class StdoutStreamer:
    """Prints each mock to a stream (stdout by default)."""

    def __init__(self, stream=None):
        self._stream = stream

    def write(self, generator: MockGenerator, interface_name: str) -> str:
        stream = self._stream if self._stream is not None else sys.stdout
        generator.write(stream)
        return '<stdout>'


class FileOutputStreamer:
    """Writes each mock to its own file under ``output_dir``."""

    def __init__(
        self,
        output_dir: str,
        case: str = 'camel',
        in_package: bool = False,
        test_only: bool = False,
    ):
        self.output_dir = Path(output_dir)
        self.case = case
        self.in_package = in_package
        self.test_only = test_only

    def filename(self, interface_name: str) -> str:
        """File name for the mock of an interface."""
        name = interface_name
        if self.case == 'underscore':
            name = underscore_case(name)

        if self.in_package and self.test_only:
            return f'mock_{name}_test.go'
        if self.in_package:
            return f'mock_{name}.go'
        if self.test_only:
            return f'{name}_test.go'
        return f'{name}.go'

    def write(self, generator: MockGenerator, interface_name: str) -> str:
        # Finish before touching the filesystem so a rejected mock leaves no file
        content = generator.finish()

        path = self.output_dir / self.filename(interface_name)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w') as f:
            f.write(content)
        print(f'Written: {path}')
        return str(path)
