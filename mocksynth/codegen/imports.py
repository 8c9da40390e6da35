"""
Import tracking for generated mocks.

This module binds every foreign package referenced by a rendered type to a
short alias, resolving collisions deterministically, and generates the Go
import block from the bindings.
"""

import os
from typing import Dict, List, Optional, Sequence, TYPE_CHECKING

from .naming import sanitize_identifier

if TYPE_CHECKING:
    from ..model import Package
    from .diagnostics import GeneratorDiagnostics


VENDOR_DIRECTORY = 'vendor'


class ImportRegistry:
    """
    Maps package import paths to the aliases used in generated code.

    One registry is created per generation unit. Bindings are kept in both
    directions so collisions can be detected by alias and reuse can be
    detected by path.
    """

    def __init__(
        self,
        source_roots: Optional[Sequence[str]] = None,
        diagnostics: Optional['GeneratorDiagnostics'] = None,
    ):
        """
        Initialize the registry.

        Args:
            source_roots: Ordered roots absolute paths are made relative to
            diagnostics: Collector for localization warnings
        """
        self._source_roots: List[str] = list(source_roots or [])
        self._diagnostics = diagnostics
        self._localization_cache: Dict[str, str] = {}
        self._path_to_name: Dict[str, str] = {}
        self._name_to_path: Dict[str, str] = {}

    # =========================================================================
    # BINDING
    # =========================================================================

    def bind(self, path: str, name: str) -> str:
        """Return the alias bound to ``path``, binding ``name`` or a variant of it.

        Args:
            path: Package import path, possibly absolute or vendored
            name: The package's own short name

        Returns:
            The alias to prefix the package's types with
        """
        path = self.localize(path)
        existing = self._path_to_name.get(path)
        if existing is not None:
            return existing

        alias = self._non_conflicting_name(path, name)
        self._path_to_name[path] = alias
        self._name_to_path[alias] = path
        return alias

    def bind_package(self, package: 'Package') -> str:
        """Bind a model package by its path and declared name."""
        return self.bind(package.path, package.name)

    def has_alias(self, name: str) -> bool:
        return name in self._name_to_path

    def path_for(self, alias: str) -> Optional[str]:
        return self._name_to_path.get(alias)

    def alias_for(self, path: str) -> Optional[str]:
        return self._path_to_name.get(self.localize(path))

    def sorted_aliases(self) -> List[str]:
        """All bound aliases in lexicographic order."""
        return sorted(self._name_to_path)

    def _non_conflicting_name(self, path: str, name: str) -> str:
        """Pick an unused alias for ``path``.

        Tries the suggested name, then the sanitized path segments joined
        from the tail inward, then the suggested name with an increasing
        numeric suffix starting at 2.
        """
        if not self.has_alias(name):
            return name

        directories = [sanitize_identifier(d) for d in path.split('/') if d]
        for i in range(1, len(directories) + 1):
            candidate = ''.join(directories[len(directories) - i:])
            if not self.has_alias(candidate):
                return candidate

        suffix = 2
        while True:
            candidate = f'{name}{suffix}'
            if not self.has_alias(candidate):
                return candidate
            suffix += 1

    # =========================================================================
    # PATH LOCALIZATION
    # =========================================================================

    def localize(self, path: str) -> str:
        """Turn a package path into the form it is imported by.

        - A path naming a .go file is reduced to its directory
        - Anything up to and including the last vendor directory is dropped
        - Absolute paths are made relative to the first matching source root
        - Separators are always '/'
        """
        cached = self._localization_cache.get(path)
        if cached is not None:
            return cached

        raw = path
        if path.endswith('.go'):
            path = os.path.dirname(path)

        directories = path.split(os.sep)
        vendor_index = -1
        for i in range(len(directories) - 1, -1, -1):
            if directories[i] == VENDOR_DIRECTORY:
                vendor_index = i
                break

        if vendor_index >= 0:
            localized = '/'.join(d for d in directories[vendor_index + 1:] if d)
        elif os.path.isabs(path):
            localized = self._relative_to_roots(path)
        else:
            localized = path

        localized = localized.replace(os.sep, '/')
        self._localization_cache[raw] = localized
        return localized

    def _relative_to_roots(self, path: str) -> str:
        """Make an absolute path relative to the first root containing it."""
        for root in self._source_roots:
            prefix = root.rstrip(os.sep)
            if not prefix or not path.startswith(prefix + os.sep):
                continue
            try:
                return os.path.relpath(path, root)
            except ValueError as e:
                if self._diagnostics is not None:
                    self._diagnostics.warn_unlocalized_path(path, root, str(e))
        return path

    # =========================================================================
    # IMPORT BLOCK
    # =========================================================================

    def generate(self, exclude_path: Optional[str] = None) -> str:
        """Generate the Go import block.

        Args:
            exclude_path: Package path never to import (the package the
                mock is generated into)

        Returns:
            The import declaration, or an empty string if nothing is imported
        """
        excluded = self.localize(exclude_path) if exclude_path else None
        lines = []
        for alias in self.sorted_aliases():
            path = self._name_to_path[alias]
            if path == excluded:
                continue
            lines.append(f'\t{alias} "{path}"')

        if not lines:
            return ''
        return 'import (\n' + '\n'.join(lines) + '\n)\n'
