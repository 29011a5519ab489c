"""
Typed buffer coercion for conebridge

Every array handed to the solver must be a C-contiguous buffer of exactly the
element type the solver was compiled with. The helpers here check array kinds
so callers can reject bad input with a descriptive message, and coerce arrays
into the solver's layout, copying only when needed.
"""
import numpy as np
from typing import Any, NamedTuple


_INDEX_DTYPES = {
    1: np.int8,
    2: np.int16,
    4: np.int32,
    8: np.int64,
}


class TypeConfig(NamedTuple):
    """
    Element types used for one solve call.

    Attributes
    ----------
    index_dtype : np.dtype
        Integer type of row indices, column pointers and cone sizes
    float_dtype : np.dtype
        Floating type of matrix values and vectors
    """
    index_dtype: np.dtype
    float_dtype: np.dtype

    @classmethod
    def for_backend(cls, backend) -> 'TypeConfig':
        """Select element types from the width a backend declares for its indices"""
        index_bytes = getattr(backend, 'index_bytes', 4)
        # unknown widths fall back to 4 byte ints
        index_dtype = _INDEX_DTYPES.get(index_bytes, np.int32)
        return cls(np.dtype(index_dtype), np.dtype(np.float64))


def is_float_array(arr: Any) -> bool:
    """Check if arr is a numpy array of floats"""
    return isinstance(arr, np.ndarray) and arr.dtype.kind == 'f'


def is_integer_array(arr: Any) -> bool:
    """Check if arr is a numpy array of signed or unsigned ints"""
    return isinstance(arr, np.ndarray) and arr.dtype.kind in 'iu'


def as_float_array(arr: Any, dtype) -> np.ndarray:
    """
    Turn a plain sequence into a float array, leaving ndarrays alone.

    ndarrays keep their dtype so that a kind check afterwards still sees
    what the caller passed in.
    """
    if isinstance(arr, np.ndarray):
        return arr
    try:
        return np.asarray(arr, dtype=dtype)
    except (TypeError, ValueError):
        return np.asarray(arr, dtype=object)


def as_index_array(arr: Any, dtype) -> np.ndarray:
    """Turn a plain sequence into an integer array, leaving ndarrays alone"""
    if isinstance(arr, np.ndarray):
        return arr
    try:
        converted = np.asarray(arr)
    except (TypeError, ValueError):
        return np.asarray(arr, dtype=object)
    if converted.size == 0:
        return converted.astype(dtype)
    return converted


def as_contiguous(arr: np.ndarray, dtype) -> np.ndarray:
    """
    Ensure array is contiguous and of the given dtype.

    Parameters
    ----------
    arr : np.ndarray
        Array of floats or ints
    dtype : dtype-like
        Target element type

    Returns
    -------
    np.ndarray
        ``arr`` itself when it is already contiguous with the target dtype,
        otherwise a new buffer. The input is never modified.

    Raises
    ------
    TypeError
        If ``arr`` is not a numpy array of floats or ints
    """
    if not isinstance(arr, np.ndarray):
        raise TypeError(f"expected a numpy array, got {type(arr).__name__}")
    if arr.dtype.kind not in 'fiu':
        raise TypeError(f"cannot coerce array of dtype {arr.dtype} to {np.dtype(dtype)}")
    return np.ascontiguousarray(arr, dtype=dtype)


def is_copy(result: np.ndarray, original: np.ndarray) -> bool:
    """Check if coercion produced a new buffer rather than returning the original"""
    return result is not original
