"""
Type expression nodes for Go method signatures.

This module contains the dataclasses that describe the types a contract
method can declare. Every node renders by structural recursion except
``Named``, which renders by identity so that recursive named types stay
finite.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


# =============================================================================
# BASE NODE
# =============================================================================

@dataclass
class TypeExpr:
    """Base class for all type expression nodes."""
    pass


@dataclass
class Package:
    """A Go package, identified by its import path."""
    path: str
    name: str


# =============================================================================
# LEAF NODES
# =============================================================================

@dataclass
class Basic(TypeExpr):
    """A predeclared basic type (int, string, bool, ...)."""
    name: str


@dataclass
class Named(TypeExpr):
    """A defined type, optionally owned by a package.

    ``underlying`` is only consulted for nilability and is excluded from
    comparisons because it may refer back to this node.
    """
    name: str
    package: Optional[Package] = None
    underlying: Optional[TypeExpr] = field(default=None, compare=False, repr=False)


# =============================================================================
# COMPOSITE NODES
# =============================================================================

@dataclass
class Pointer(TypeExpr):
    """Represents *T."""
    elem: TypeExpr


@dataclass
class Array(TypeExpr):
    """Represents [N]T."""
    length: int
    elem: TypeExpr


@dataclass
class Slice(TypeExpr):
    """Represents []T."""
    elem: TypeExpr


@dataclass
class Map(TypeExpr):
    """Represents map[K]V."""
    key: TypeExpr
    value: TypeExpr


class ChanDir(Enum):
    """Channel directions."""
    SEND_RECV = 'sendrecv'
    SEND_ONLY = 'send'
    RECV_ONLY = 'recv'


@dataclass
class Chan(TypeExpr):
    """Represents chan T, <-chan T and chan<- T."""
    elem: TypeExpr
    direction: ChanDir = ChanDir.SEND_RECV


@dataclass
class Var:
    """A parameter or result: an optional name and its type."""
    name: str
    type: TypeExpr


@dataclass
class Signature(TypeExpr):
    """Represents a func type."""
    params: List[Var] = field(default_factory=list)
    results: List[Var] = field(default_factory=list)
    variadic: bool = False


@dataclass
class Field:
    """A struct field. Embedded fields have no name of their own."""
    name: str
    type: TypeExpr
    embedded: bool = False


@dataclass
class Struct(TypeExpr):
    """Represents an anonymous struct{...}."""
    fields: List[Field] = field(default_factory=list)


@dataclass
class Interface(TypeExpr):
    """Represents an inline interface{...}.

    Only the empty interface can be rendered; methods are kept so the
    renderer can tell the two apart.
    """
    methods: List['Method'] = field(default_factory=list)
    embedded: List[TypeExpr] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.methods and not self.embedded


@dataclass
class Method:
    """A method of a contract or of an inline interface."""
    name: str
    params: List[Var] = field(default_factory=list)
    results: List[Var] = field(default_factory=list)
    variadic: bool = False


# =============================================================================
# PREDECLARED TYPES
# =============================================================================

BASIC_TYPE_NAMES = frozenset([
    'bool', 'string', 'byte', 'rune', 'uintptr',
    'int', 'int8', 'int16', 'int32', 'int64',
    'uint', 'uint8', 'uint16', 'uint32', 'uint64',
    'float32', 'float64', 'complex64', 'complex128',
])


def error_type() -> Named:
    """Return the predeclared ``error`` type."""
    return Named(
        name='error',
        underlying=Interface(methods=[
            Method(name='Error', results=[Var(name='', type=Basic('string'))]),
        ]),
    )
