"""
Go Mock Synthesizer

This package generates testify-backed mock implementations of Go
interfaces from structural contract descriptions.

Module Structure:
- model/: Contract and type expression definitions
- loader/: Go type expression lexer/parser and JSON contract loading
- codegen/: Import registry, type renderer, declaration synthesizer,
  finishing pass and diagnostics
- config.py: Run configuration and source roots
- output.py: Output sinks (stdout, files)
- mocker.py: Batch orchestration and CLI

Usage:
    from mocksynth import ContractLoader, MockGenerator

    contracts = ContractLoader().load_file('fetcher.json')
    generator = MockGenerator(contracts[0])
    print(generator.render())
"""

from .codegen import MockGenerator, ImportRegistry, TypeRenderer, DeclarationSynthesizer
from .loader import ContractLoader
from .mocker import Mocker
from .config import GeneratorConfig, SourceRoots

__all__ = [
    'MockGenerator',
    'ImportRegistry',
    'TypeRenderer',
    'DeclarationSynthesizer',
    'ContractLoader',
    'Mocker',
    'GeneratorConfig',
    'SourceRoots',
]
