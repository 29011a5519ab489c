"""
Warm-start loading

A warm start is an optional mapping with keys ``'x'`` (length n), ``'y'``
(length m) and ``'s'`` (length m). Components may be given independently; a
malformed component is dropped with a warning and the solve goes ahead.
"""
import logging
import warnings
import numpy as np
from typing import Mapping, Optional

from .buffers import TypeConfig, as_contiguous, as_float_array, is_copy, is_float_array
from .exceptions import WarmStartMismatch
from .lifecycle import Workspace


logger = logging.getLogger(__name__)


class WarmStart:
    """
    Initial guess handed to the solver.

    ``x``, ``y`` and ``s`` are always arrays of the right length; components
    the caller did not supply are zero vectors.

    Attributes
    ----------
    x : np.ndarray
        Primal guess (length n)
    y : np.ndarray
        Dual guess (length m)
    s : np.ndarray
        Slack guess (length m)
    supplied : dict
        Which of ``'x'``, ``'y'``, ``'s'`` came from the caller
    """

    def __init__(self, x: np.ndarray, y: np.ndarray, s: np.ndarray, supplied=None):
        self.x = x
        self.y = y
        self.s = s
        self.supplied = dict(supplied or {'x': False, 'y': False, 's': False})

    @property
    def enabled(self) -> bool:
        """True if at least one component came from the caller"""
        return any(self.supplied.values())

    def __repr__(self):
        given = [key for key, flag in self.supplied.items() if flag]
        return f"<WarmStart enabled={self.enabled} supplied={given}>"


def _load_component(
    key: str,
    warm: Mapping,
    length: int,
    workspace: Workspace,
    types: TypeConfig,
):
    name = f"warm.{key}"
    value = warm.get(key)
    if value is not None:
        arr = as_float_array(value, types.float_dtype)
        if is_float_array(arr) and arr.ndim == 1 and arr.shape[0] == length:
            buffer = as_contiguous(arr, types.float_dtype)
            return workspace.track(name, buffer, copied=is_copy(buffer, arr)), True

        logger.warning("Dropping warm-start field '%s': expected %d floats", key, length)
        warnings.warn(
            f"Error parsing warm-start input '{key}': expected a one-dimensional "
            f"float array of length {length}; ignoring it",
            WarmStartMismatch,
            stacklevel=4,
        )
    return workspace.track(name, np.zeros(length, dtype=types.float_dtype)), False


def load_warm_start(
    warm: Optional[Mapping],
    rows: int,
    cols: int,
    workspace: Workspace,
    types: TypeConfig,
) -> WarmStart:
    """
    Bind the caller's warm start, zero-filling what is missing.

    Parameters
    ----------
    warm : mapping or None
        Warm-start vectors keyed by ``'x'``, ``'y'``, ``'s'``
    rows : int
        Number of rows of A
    cols : int
        Number of columns of A
    workspace : Workspace
        Receives the bound and zero-filled buffers
    types : TypeConfig
        Element types for this call

    Returns
    -------
    WarmStart
    """
    if warm is None:
        warm = {}
    elif not isinstance(warm, Mapping):
        warnings.warn(
            "Error parsing warm-start input: expected a dictionary; ignoring it",
            WarmStartMismatch,
            stacklevel=3,
        )
        warm = {}

    x, has_x = _load_component('x', warm, cols, workspace, types)
    y, has_y = _load_component('y', warm, rows, workspace, types)
    s, has_s = _load_component('s', warm, rows, workspace, types)
    return WarmStart(x, y, s, supplied={'x': has_x, 'y': has_y, 's': has_s})
