"""
Base generator class with shared utilities.

This module provides the BaseGenerator class that contains the buffer and
indentation helpers used by the renderer and the synthesizer.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .context import GenerationContext


class BaseGenerator:
    """
    Base class for all code generators.

    Provides shared utilities for:
    - Indentation management
    - Writing into the context's text buffer
    """

    def __init__(self, ctx: 'GenerationContext'):
        """
        Initialize the base generator.

        Args:
            ctx: The code generation context containing all state
        """
        self._ctx = ctx

    # =========================================================================
    # INDENTATION
    # =========================================================================

    def indent(self) -> str:
        """Return the current indentation string."""
        return self._ctx.indent()

    @property
    def indent_level(self) -> int:
        """Get the current indentation level."""
        return self._ctx.indent_level

    @indent_level.setter
    def indent_level(self, value: int):
        """Set the current indentation level."""
        self._ctx.indent_level = value

    # =========================================================================
    # OUTPUT
    # =========================================================================

    def write(self, text: str) -> None:
        """Write raw text to the buffer."""
        self._ctx.write(text)

    def line(self, text: str = '') -> None:
        """Write one indented line. Empty lines carry no indentation."""
        if text:
            self._ctx.write(f'{self.indent()}{text}\n')
        else:
            self._ctx.write('\n')
