"""
Naming helpers shared by the import registry, the synthesizer and the
output sink.
"""

import re
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..model import Contract
    from .imports import ImportRegistry


INVALID_IDENTIFIER_CHAR = re.compile(r'[^0-9A-Za-z_]')

# Identifiers declared by the generated method bodies
GENERATED_IDENTIFIERS = frozenset(['_m', '_e', '_ca', '_va', '_i', 'ret', 'rf', 'ok'])
_RESULT_VAR = re.compile(r'^r\d+$')


def sanitize_identifier(segment: str) -> str:
    """Replace every character that cannot appear in a Go identifier with '_'."""
    return INVALID_IDENTIFIER_CHAR.sub('_', segment)


def is_exported(name: str) -> bool:
    return bool(name) and name[0].isupper()


def mock_name(contract: 'Contract', in_package: bool) -> str:
    """
    Name of the mock type for a contract.

    Out of package the mock reuses the interface name. In package it is
    prefixed so it does not clash with the interface itself, keeping the
    interface's exported-ness.
    """
    if in_package:
        if is_exported(contract.name):
            return 'Mock' + contract.name
        return 'mock' + contract.name[:1].upper() + contract.name[1:]
    return contract.name


def param_name_collides(name: str, package_name: str, imports: 'ImportRegistry') -> bool:
    """Check if a parameter name would shadow something the mock refers to."""
    if name == package_name:
        return True
    if name in GENERATED_IDENTIFIERS or _RESULT_VAR.match(name):
        return True
    return imports.has_alias(name)


def underscore_case(name: str) -> str:
    """
    Convert a CamelCase name to snake_case.

    Handles:
    - Requester -> requester
    - RequesterNS -> requester_ns
    - HTTPClient -> http_client
    """
    name = re.sub(r'([A-Z]+)([A-Z][a-z])', r'\1_\2', name)
    name = re.sub(r'([a-z\d])([A-Z])', r'\1_\2', name)
    return name.lower()
