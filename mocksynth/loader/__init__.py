"""
Loader module for the Go mock synthesizer.

This module provides the contract provider: a tokenizer and parser for Go
type expressions and a loader for JSON contract descriptions.
"""

from .errors import ContractLoadError, TypeSyntaxError
from .tokens import TokenType, Token, KEYWORDS, SINGLE_CHAR_OPS
from .lexer import Lexer
from .type_parser import TypeParser, TypeScope, parse_type, parse_parameter_type, default_package_name
from .contract_loader import ContractLoader, load_contracts_from_directory

__all__ = [
    'ContractLoadError',
    'TypeSyntaxError',
    'TokenType',
    'Token',
    'KEYWORDS',
    'SINGLE_CHAR_OPS',
    'Lexer',
    'TypeParser',
    'TypeScope',
    'parse_type',
    'parse_parameter_type',
    'default_package_name',
    'ContractLoader',
    'load_contracts_from_directory',
]
