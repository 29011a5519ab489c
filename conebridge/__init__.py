"""
conebridge Python Package

Validating interface to native conic solvers: checks and canonicalizes cone
problem data, calls the solver, and deep copies the solution back.
"""

from .solver import ConeSolver, csolve, solve
from .parameters import SolverOptions
from .results import Diagnostics, Solution
from .cones import ConeSpec
from .model import Problem, SparseMatrixCSC
from .warmstart import WarmStart
from .lifecycle import Workspace
from .backends import SolverBackend, ScsBackend, get_backend
from .exceptions import (
    ConeBridgeError, ShapeError, DimensionMismatchError, ConeFieldError,
    OptionFieldError, SolverError, WarmStartMismatch,
)

__version__ = "0.1.0"

__all__ = [
    'ConeSolver',
    'csolve',
    'solve',
    'SolverOptions',
    'Solution',
    'Diagnostics',
    'ConeSpec',
    'Problem',
    'SparseMatrixCSC',
    'WarmStart',
    'Workspace',
    '__version__',
    # Backends
    'SolverBackend',
    'ScsBackend',
    'get_backend',
    # Errors
    'ConeBridgeError',
    'ShapeError',
    'DimensionMismatchError',
    'ConeFieldError',
    'OptionFieldError',
    'SolverError',
    'WarmStartMismatch',
]
