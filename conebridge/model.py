"""
Problem data for conebridge

The problem solved is

    minimize    c'*x
    subject to  A*x + s = b
                s in K

with ``A`` given as a sparse matrix in compressed sparse column (CSC) form.
"""
import numbers
import numpy as np
from scipy import sparse
from typing import Any, Tuple

from .buffers import (
    TypeConfig, as_contiguous, as_float_array, as_index_array,
    is_copy, is_float_array, is_integer_array,
)
from .exceptions import ConeBridgeError, DimensionMismatchError, ShapeError
from .lifecycle import Workspace


class SparseMatrixCSC:
    """
    Sparse matrix in compressed sparse column form.

    The column pointers are trusted: they are expected to be non-decreasing
    and to end at the number of nonzeros, but this is not checked.

    Attributes
    ----------
    values : np.ndarray
        Nonzero values (length nnz)
    row_indices : np.ndarray
        Row index of each nonzero (length nnz)
    col_pointers : np.ndarray
        Offset of the first nonzero of each column (length n+1)
    """

    def __init__(self, values: np.ndarray, row_indices: np.ndarray, col_pointers: np.ndarray):
        self.values = values
        self.row_indices = row_indices
        self.col_pointers = col_pointers

    @property
    def nnz(self) -> int:
        """Number of stored nonzeros"""
        return len(self.values)

    def to_scipy(self, shape: Tuple[int, int]) -> sparse.csc_matrix:
        """Wrap the three buffers in a scipy CSC matrix of the given shape"""
        return sparse.csc_matrix(
            (self.values, self.row_indices, self.col_pointers), shape=shape, copy=False
        )

    def __repr__(self):
        return f"<SparseMatrixCSC nnz={self.nnz}>"


class Problem:
    """
    Fully validated cone problem, ready to be handed to a solver backend.

    Attributes
    ----------
    rows : int
        Number of rows of A (length of b, y and s)
    cols : int
        Number of columns of A (length of c and x)
    A : SparseMatrixCSC
        Constraint matrix
    b : np.ndarray
        Constraint right-hand side
    c : np.ndarray
        Objective coefficients
    """

    def __init__(self, rows: int, cols: int, A: SparseMatrixCSC, b: np.ndarray, c: np.ndarray):
        self.rows = rows
        self.cols = cols
        self.A = A
        self.b = b
        self.c = c

    @property
    def shape(self) -> Tuple[int, int]:
        return self.rows, self.cols

    def __repr__(self):
        return f"<Problem m={self.rows} n={self.cols} nnz={self.A.nnz}>"


def check_dimension(name: str, value: Any) -> int:
    """Check that a declared dimension is a non-negative integer"""
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise ConeBridgeError(f"{name} must be a non-negative integer", field=name)
    if value < 0:
        raise ConeBridgeError(f"{name} must be a non-negative integer", field=name)
    return int(value)


def _bind(workspace: Workspace, name: str, arr: np.ndarray, dtype) -> np.ndarray:
    buffer = as_contiguous(arr, dtype)
    return workspace.track(name, buffer, copied=is_copy(buffer, arr))


def _float_vector(name: str, value: Any, types: TypeConfig) -> np.ndarray:
    arr = as_float_array(value, types.float_dtype)
    if not is_float_array(arr) or arr.ndim != 1:
        raise ShapeError(f"{name} must be a dense numpy array with one dimension", field=name)
    return arr


def build_matrix(
    Ax: Any,
    Ai: Any,
    Ap: Any,
    workspace: Workspace,
    types: TypeConfig,
) -> SparseMatrixCSC:
    """
    Validate the CSC triplet and bind it into a single matrix.

    Parameters
    ----------
    Ax : array_like
        Nonzero values, floats
    Ai : array_like
        Row indices, ints
    Ap : array_like
        Column pointers, ints
    workspace : Workspace
        Receives the coerced buffers
    types : TypeConfig
        Element types for this call

    Returns
    -------
    SparseMatrixCSC
    """
    Ax = as_float_array(Ax, types.float_dtype)
    Ai = as_index_array(Ai, types.index_dtype)
    Ap = as_index_array(Ap, types.index_dtype)

    # all kinds are checked before anything is coerced
    if not is_float_array(Ax) or Ax.ndim != 1:
        raise ShapeError("Ax must be a numpy array of floats", field='Ax')
    if not is_integer_array(Ai) or Ai.ndim != 1:
        raise ShapeError("Ai must be a numpy array of ints", field='Ai')
    if not is_integer_array(Ap) or Ap.ndim != 1:
        raise ShapeError("Ap must be a numpy array of ints", field='Ap')

    values = _bind(workspace, 'Ax', Ax, types.float_dtype)
    row_indices = _bind(workspace, 'Ai', Ai, types.index_dtype)
    col_pointers = _bind(workspace, 'Ap', Ap, types.index_dtype)
    return SparseMatrixCSC(values, row_indices, col_pointers)


def build_problem(
    shape: Tuple[int, int],
    Ax: Any,
    Ai: Any,
    Ap: Any,
    b: Any,
    c: Any,
    workspace: Workspace,
    types: TypeConfig,
) -> Problem:
    """
    Validate and canonicalize the problem data.

    Parameters
    ----------
    shape : (int, int)
        ``(m, n)``, the number of rows and columns of A
    Ax, Ai, Ap : array_like
        CSC triplet of A
    b : array_like
        Constraint vector of floats (length m)
    c : array_like
        Objective vector of floats (length n)
    workspace : Workspace
        Receives every coerced buffer, so a failure part way through leaves
        nothing behind once the workspace is released
    types : TypeConfig
        Element types for this call

    Returns
    -------
    Problem

    Raises
    ------
    ShapeError
        If an array has the wrong element kind or is not one-dimensional
    DimensionMismatchError
        If ``b`` or ``c`` does not match the shape of A
    """
    try:
        m, n = shape
    except (TypeError, ValueError):
        raise ConeBridgeError("shape must be a pair (m, n)", field='shape') from None
    m = check_dimension('m', m)
    n = check_dimension('n', n)

    A = build_matrix(Ax, Ai, Ap, workspace, types)

    c = _float_vector('c', c, types)
    if c.shape[0] != n:
        raise DimensionMismatchError("c has incompatible dimension with A", field='c')
    c = _bind(workspace, 'c', c, types.float_dtype)

    b = _float_vector('b', b, types)
    if b.shape[0] != m:
        raise DimensionMismatchError("b has incompatible dimension with A", field='b')
    b = _bind(workspace, 'b', b, types.float_dtype)

    return Problem(m, n, A, b, c)
