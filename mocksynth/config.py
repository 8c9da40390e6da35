"""
Configuration for mock generation runs.

Settings come from an optional JSON file and are overridden by command
line flags. Source roots are resolved once, up front, and handed to every
generation unit explicitly.
"""

import json
import os
from dataclasses import dataclass, field, fields
from typing import Any, Dict, Iterable, List, Optional

from .codegen.context import DEFAULT_MOCK_IMPORT_PATH
from .codegen.formatter import FORMATTERS


CASES = ('camel', 'underscore')


class ConfigError(Exception):
    """Raised when a configuration file or value is invalid."""
    pass


class SourceRoots:
    """
    Ordered list of directories absolute package paths are relative to.

    The first root containing a path wins, so more specific roots should
    come first.
    """

    def __init__(self, roots: Optional[Iterable[str]] = None):
        self._roots: List[str] = []
        for root in roots or []:
            self.add(root)

    def add(self, root: str) -> None:
        if root and root not in self._roots:
            self._roots.append(root)

    def extend(self, other: 'SourceRoots') -> None:
        for root in other:
            self.add(root)

    def __iter__(self):
        return iter(self._roots)

    def __len__(self) -> int:
        return len(self._roots)

    def as_list(self) -> List[str]:
        return list(self._roots)

    @classmethod
    def from_gopath(cls, gopath: Optional[str]) -> 'SourceRoots':
        """Build roots from a GOPATH value: <entry>/src for each entry."""
        if not gopath:
            return cls()
        return cls(os.path.join(entry, 'src') for entry in gopath.split(os.pathsep) if entry)


@dataclass
class GeneratorConfig:
    """Settings for one mocksynth run."""
    in_package: bool = False
    package_name: str = 'mocks'
    note: str = ''
    output_dir: str = './mocks'
    print_only: bool = False
    case: str = 'camel'
    test_only: bool = False
    formatter: str = 'gofmt'
    source_roots: List[str] = field(default_factory=list)
    mock_import_path: str = DEFAULT_MOCK_IMPORT_PATH
    interface_name: str = ''
    exported_only: bool = False
    verbose: bool = False

    def validate(self) -> None:
        """Check enumerated settings, raising ConfigError on bad values."""
        if self.case not in CASES:
            raise ConfigError(f'Unknown case {self.case!r} (expected one of {", ".join(CASES)})')
        if self.formatter not in FORMATTERS:
            raise ConfigError(
                f'Unknown formatter {self.formatter!r} (expected one of {", ".join(FORMATTERS)})'
            )
        if not self.package_name:
            raise ConfigError('package name must not be empty')

    def roots(self, gopath: Optional[str] = None) -> SourceRoots:
        """Configured source roots followed by the roots derived from ``gopath``."""
        roots = SourceRoots(self.source_roots)
        roots.extend(SourceRoots.from_gopath(gopath))
        return roots

    def update(self, values: Dict[str, Any]) -> None:
        """Override settings from a dict, accepting snake_case or camelCase keys."""
        known = {f.name for f in fields(self)}
        for key, value in values.items():
            name = _snake_case(key)
            if name not in known:
                raise ConfigError(f'Unknown configuration key {key!r}')
            setattr(self, name, value)

    @classmethod
    def from_file(cls, filepath: str) -> 'GeneratorConfig':
        """Load a configuration from a JSON file."""
        try:
            with open(filepath, 'r') as f:
                values = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigError(f'Failed to load {filepath}: {e}') from e
        if not isinstance(values, dict):
            raise ConfigError(f'{filepath}: configuration must be a JSON object')

        config = cls()
        config.update(values)
        config.validate()
        return config


def _snake_case(key: str) -> str:
    result = ''
    for ch in key:
        if ch.isupper():
            result += '_' + ch.lower()
        else:
            result += ch
    return result
