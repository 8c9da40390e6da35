"""
Code generation module for the Go mock synthesizer.

This module provides Go mock generation from contract descriptions.
"""

from .errors import (
    MockGenerationError,
    NotSetupError,
    InlineInterfaceError,
    VariadicTypeError,
    FormatError,
)
from .diagnostics import GeneratorDiagnostics, Diagnostic, DiagnosticSeverity
from .imports import ImportRegistry
from .context import GenerationContext, DEFAULT_MOCK_IMPORT_PATH
from .base import BaseGenerator
from .type_renderer import TypeRenderer, is_nillable
from .synthesizer import DeclarationSynthesizer, ParamList
from .formatter import GoFormatter, PassthroughFormatter, get_formatter
from .generator import MockGenerator, VERSION

__all__ = [
    'MockGenerationError',
    'NotSetupError',
    'InlineInterfaceError',
    'VariadicTypeError',
    'FormatError',
    'GeneratorDiagnostics',
    'Diagnostic',
    'DiagnosticSeverity',
    'ImportRegistry',
    'GenerationContext',
    'DEFAULT_MOCK_IMPORT_PATH',
    'BaseGenerator',
    'TypeRenderer',
    'is_nillable',
    'DeclarationSynthesizer',
    'ParamList',
    'GoFormatter',
    'PassthroughFormatter',
    'get_formatter',
    'MockGenerator',
    'VERSION',
]
