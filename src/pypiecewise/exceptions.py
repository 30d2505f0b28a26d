"""Exceptions raised by pypiecewise."""

from __future__ import annotations


class DomainError(ValueError):
    """A position lies outside the closed interval spanned by the abscissas.

    Raised for every query on an empty function as well.
    """

    def __init__(self, position, domain=None):
        self.position = position
        self.domain = domain
        if domain is None:
            message = f"No value for position {position}: function has no samples"
        else:
            lo, hi = domain
            message = f"No value for position {position}: outside domain [{lo}, {hi}]"
        super().__init__(message)


class DivisionError(ZeroDivisionError):
    """Reciprocal or scalar division by an exact zero."""

    def __init__(self, position=None):
        self.position = position
        if position is None:
            message = "Division by zero scalar"
        else:
            message = f"Cannot invert zero value at abscissa {position}"
        super().__init__(message)


class FormatError(ValueError):
    """A sample file does not have the expected format."""

    def __init__(self, message: str, path=None, line_number: int | None = None):
        self.path = path
        self.line_number = line_number
        if line_number is not None:
            message = f"{path}:{line_number}: {message}"
        elif path is not None:
            message = f"{path}: {message}"
        super().__init__(message)
