"""
Model module for the Go mock synthesizer.

This module provides the contract and type expression definitions the
code generator consumes.
"""

from .type_nodes import (
    # Base
    TypeExpr,
    Package,
    # Leaves
    Basic,
    Named,
    # Composites
    Pointer,
    Array,
    Slice,
    Map,
    Chan,
    ChanDir,
    Signature,
    Var,
    Struct,
    Field,
    Interface,
    Method,
    # Predeclared
    BASIC_TYPE_NAMES,
    error_type,
)
from .contract import Contract

__all__ = [
    'TypeExpr',
    'Package',
    'Basic',
    'Named',
    'Pointer',
    'Array',
    'Slice',
    'Map',
    'Chan',
    'ChanDir',
    'Signature',
    'Var',
    'Struct',
    'Field',
    'Interface',
    'Method',
    'BASIC_TYPE_NAMES',
    'error_type',
    'Contract',
]
