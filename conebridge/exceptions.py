"""
Exception classes for conebridge
"""
from typing import Optional


class ConeBridgeError(ValueError):
    """Base class for every input error raised before the solver is called."""

    def __init__(self, message: str, field: Optional[str] = None) -> None:
        self.message = message
        self.field = field
        super().__init__(message)


class ShapeError(ConeBridgeError, TypeError):
    """
    Raised when an array field has the wrong dimensionality or element kind.

    Applies to the matrix triplet (``Ax``, ``Ai``, ``Ap``), ``b`` and ``c``.
    """


class DimensionMismatchError(ConeBridgeError):
    """Raised when a vector length disagrees with the declared shape of A."""


class ConeFieldError(ConeBridgeError):
    """
    Raised when a cone field is non-numeric, negative, or neither a scalar
    nor a list.
    """

    def __init__(self, field: str, message: Optional[str] = None) -> None:
        super().__init__(message or f"failed to parse cone field {field}", field=field)


class OptionFieldError(ConeBridgeError):
    """Raised when a solver option is non-numeric or negative."""

    def __init__(self, option: str, message: Optional[str] = None) -> None:
        self.option = option
        super().__init__(
            message or f"'{option}' ought to be a nonnegative number", field=option
        )


class SolverError(RuntimeError):
    """Raised when the solver backend hands back output of the wrong shape."""


class WarmStartMismatch(UserWarning):
    """
    Warning category for a warm-start vector that was dropped.

    A malformed warm-start field never aborts the solve; the component is
    zero-filled instead.
    """
