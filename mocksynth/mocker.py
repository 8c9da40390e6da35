#!/usr/bin/env python3
"""
Go Mock Synthesizer

Generates testify-backed mock implementations of Go interfaces from JSON
contract descriptions. Every interface is generated as its own unit with
its own import registry, so one broken contract never affects another.

Usage:
    python -m mocksynth.mocker contracts/ -o mocks/
    python -m mocksynth.mocker fetcher.json --name Fetcher --print

The heavy lifting lives in:
- loader: contract descriptions and Go type expression parsing
- codegen: import aliasing, type rendering and declaration synthesis
"""

import os
import sys
from pathlib import Path
from typing import Dict, List, Optional

from .codegen import (
    GeneratorDiagnostics,
    MockGenerationError,
    MockGenerator,
    get_formatter,
)
from .config import CASES, ConfigError, GeneratorConfig
from .codegen.formatter import FORMATTERS
from .loader import ContractLoadError, ContractLoader, load_contracts_from_directory
from .model import Contract
from .output import FileOutputStreamer, StdoutStreamer


class Mocker:
    """Main class that loads contracts and writes one mock per contract."""

    def __init__(
        self,
        config: Optional[GeneratorConfig] = None,
        gopath: Optional[str] = None,
        diagnostics: Optional[GeneratorDiagnostics] = None,
        sink=None,
        formatter=None,
    ):
        self.config = config or GeneratorConfig()
        self.config.validate()
        self.source_roots = self.config.roots(gopath)
        self.diagnostics = diagnostics or GeneratorDiagnostics(verbose=self.config.verbose)
        self.contracts: List[Contract] = []
        self.failures: Dict[str, Exception] = {}
        self._loader = ContractLoader()
        self._formatter = formatter or get_formatter(self.config.formatter)

        if sink is not None:
            self._sink = sink
        elif self.config.print_only:
            self._sink = StdoutStreamer()
        else:
            self._sink = FileOutputStreamer(
                self.config.output_dir,
                case=self.config.case,
                in_package=self.config.in_package,
                test_only=self.config.test_only,
            )

    # =========================================================================
    # LOADING
    # =========================================================================

    def load(self, path: str) -> int:
        """Load the contracts of a description file or directory.

        Returns:
            The number of contracts loaded
        """
        try:
            if Path(path).is_dir():
                contracts = load_contracts_from_directory(path)
            else:
                contracts = self._loader.load_file(path)
        except ContractLoadError as e:
            print(f'Error loading {path}: {e}', file=sys.stderr)
            self.diagnostics.error_load_failed(path, e)
            self.failures[path] = e
            return 0

        self.contracts.extend(contracts)
        return len(contracts)

    def selected_contracts(self) -> List[Contract]:
        """Contracts left after the name and exported-only filters."""
        selected = []
        for contract in self.contracts:
            if self.config.interface_name and contract.name != self.config.interface_name:
                continue
            if self.config.exported_only and not contract.is_exported:
                continue
            selected.append(contract)
        return selected

    # =========================================================================
    # GENERATION
    # =========================================================================

    def generator_for(self, contract: Contract) -> MockGenerator:
        """Build a fresh generation unit for one contract."""
        return MockGenerator(
            contract,
            package_name=self.config.package_name,
            in_package=self.config.in_package,
            source_roots=self.source_roots.as_list(),
            diagnostics=self.diagnostics,
            formatter=self._formatter,
            mock_import_path=self.config.mock_import_path,
        )

    def generate(self, contract: Contract) -> MockGenerator:
        """Generate the mock of one contract into a new generator's buffer."""
        generator = self.generator_for(contract)
        generator.generate_prologue_note(self.config.note)
        generator.generate_prologue()
        generator.generate()
        return generator

    def mock_contract(self, contract: Contract) -> bool:
        """Generate and write one mock. Failures are recorded, not raised."""
        try:
            generator = self.generate(contract)
            destination = self._sink.write(generator, contract.name)
        except MockGenerationError as e:
            print(f'Error generating mock for {contract.name}: {e}', file=sys.stderr)
            self.diagnostics.error_generation_failed(contract.name, e)
            self.failures[contract.name] = e
            return False

        self.diagnostics.info_mock_written(contract.name, destination)
        return True

    def run(self) -> int:
        """Mock every selected contract.

        Returns:
            Process exit code: 0 if every mock was written, 1 otherwise
        """
        selected = self.selected_contracts()
        if self.config.interface_name and not selected:
            print(f'Unable to find {self.config.interface_name} in any loaded contract', file=sys.stderr)
            return 1

        for contract in selected:
            self.mock_contract(contract)

        self.diagnostics.print_summary()
        return 1 if self.failures else 0


# =============================================================================
# CLI INTERFACE
# =============================================================================

def default_gopath() -> str:
    """GOPATH from the environment, or Go's default of ~/go."""
    return os.environ.get('GOPATH') or os.path.join(os.path.expanduser('~'), 'go')


def build_config(args) -> GeneratorConfig:
    """Merge the configuration file (if any) with command line flags."""
    config = GeneratorConfig.from_file(args.config) if args.config else GeneratorConfig()

    overrides = {
        'interface_name': args.name,
        'output_dir': args.output,
        'case': args.case,
        'note': args.note,
        'package_name': args.pkg,
        'formatter': args.formatter,
    }
    for key, value in overrides.items():
        if value is not None:
            setattr(config, key, value)

    if args.print:
        config.print_only = True
    if args.inpkg:
        config.in_package = True
    if args.testonly:
        config.test_only = True
    if args.exported:
        config.exported_only = True
    if args.verbose:
        config.verbose = True
    if args.source_root:
        config.source_roots = list(args.source_root) + list(config.source_roots)

    config.validate()
    return config


def main(argv: Optional[List[str]] = None) -> int:
    import argparse

    parser = argparse.ArgumentParser(description='Generate Go mocks from contract descriptions')
    parser.add_argument('input', nargs='+', help='Contract description file or directory')
    parser.add_argument('--name', help='Only mock the interface with this name')
    parser.add_argument('--print', action='store_true', help='Print to stdout instead of writing files')
    parser.add_argument('-o', '--output', help='Output directory (default ./mocks)')
    parser.add_argument('--inpkg', action='store_true',
                        help='Generate the mock into the interface\'s own package')
    parser.add_argument('--testonly', action='store_true', help='Write mocks to _test.go files')
    parser.add_argument('--case', choices=CASES, help='File name case for written mocks')
    parser.add_argument('--note', help='Comment added to the top of every mock (split on \\n)')
    parser.add_argument('--pkg', help='Package name for mocks generated out of package')
    parser.add_argument('--exported', action='store_true', help='Only mock exported interfaces')
    parser.add_argument('--source-root', action='append', metavar='DIR',
                        help='Directory absolute package paths are made relative to')
    parser.add_argument('--formatter', choices=FORMATTERS, help='Finishing pass to run')
    parser.add_argument('--config', metavar='FILE', help='JSON configuration file')
    parser.add_argument('-v', '--verbose', action='store_true', help='List every diagnostic')

    args = parser.parse_args(argv)

    try:
        config = build_config(args)
    except ConfigError as e:
        print(f'Error: {e}', file=sys.stderr)
        return 2

    mocker = Mocker(config, gopath=default_gopath())
    for path in args.input:
        if not Path(path).exists():
            print(f'Error: {path} is not a valid file or directory', file=sys.stderr)
            return 1
        mocker.load(path)

    return mocker.run()


if __name__ == '__main__':
    sys.exit(main())
