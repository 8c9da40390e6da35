"""
Errors raised while loading contract descriptions.
"""


class ContractLoadError(Exception):
    """Raised when a contract description cannot be loaded."""
    pass


class TypeSyntaxError(ContractLoadError):
    """Raised when a type expression string cannot be parsed."""

    def __init__(self, message: str, text: str = '', line: int = 0, column: int = 0):
        self.text = text
        self.line = line
        self.column = column
        if line:
            message = f'{message} at line {line}, column {column}'
        if text:
            message = f'{message} in {text!r}'
        super().__init__(message)
