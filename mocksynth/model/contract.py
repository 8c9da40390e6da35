"""
Contract definitions.

A Contract is the behavioral interface a mock is synthesized for. It is
supplied fully resolved by a contract provider and never mutated by the
code generator.
"""

from dataclasses import dataclass, field
from typing import List

from .type_nodes import Method, Package


@dataclass
class Contract:
    """Represents a Go interface declared in ``package``."""
    name: str
    package: Package
    methods: List[Method] = field(default_factory=list)

    @property
    def is_exported(self) -> bool:
        """Exported Go identifiers start with an upper-case letter."""
        return bool(self.name) and self.name[0].isupper()
