"""
Errors raised while generating a mock.

Every error that aborts a generation unit derives from MockGenerationError
so batch callers can skip one contract and carry on with the next.
"""

from typing import Optional


class MockGenerationError(Exception):
    """Base class for errors that abort the current generation unit."""
    pass


class NotSetupError(MockGenerationError):
    """Raised when the generator has no contract to work on."""

    def __init__(self, message: str = 'generator is not set up with a contract'):
        super().__init__(message)


class InlineInterfaceError(MockGenerationError):
    """Raised when an inline interface with methods has to be rendered."""

    def __init__(self, type_repr: str, method: str = ''):
        self.type_repr = type_repr
        self.method = method
        location = f' in method {method}' if method else ''
        super().__init__(
            f'Unable to mock inline interfaces with methods{location}: {type_repr}'
        )


class VariadicTypeError(MockGenerationError):
    """Raised when a variadic parameter is not declared as a slice."""

    def __init__(self, type_repr: str, method: str = ''):
        self.type_repr = type_repr
        self.method = method
        location = f' of method {method}' if method else ''
        super().__init__(
            f'Variadic parameter{location} must be a slice, got {type_repr}'
        )


class FormatError(MockGenerationError):
    """Raised when the finishing pass rejects the generated source."""

    def __init__(self, message: str, source: str = '', details: Optional[str] = None):
        self.source = source
        self.details = details or ''
        if self.details:
            message = f'{message}: {self.details.strip()}'
        super().__init__(message)
