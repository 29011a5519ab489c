"""
Solver options for conebridge
"""
import logging
import math
import numbers
import numpy as np
from dataclasses import dataclass, fields
from typing import Any, Dict, Mapping, Optional

from .exceptions import OptionFieldError


logger = logging.getLogger(__name__)

INT_OPTIONS = ('max_iters', 'verbose', 'normalize')
FLOAT_OPTIONS = ('scale', 'eps', 'cg_rate', 'alpha', 'rho_x')


@dataclass(frozen=True)
class SolverOptions:
    """
    Configuration options for the cone solver.

    Attributes
    ----------
    max_iters : int
        Maximum number of iterations (default: 2500)
    verbose : int
        Print solver progress when nonzero (default: 1)
    normalize : int
        Rescale the problem data before solving when nonzero (default: 1)
    scale : float
        Scaling applied to the normalized data (default: 5.0)
    eps : float
        Convergence tolerance (default: 1e-3)
    cg_rate : float
        Tolerance decay rate for the indirect linear system solver (default: 2.0)
    alpha : float
        Relaxation parameter (default: 1.8)
    rho_x : float
        Weight on the x-block of the linear system (default: 1e-3)

    Examples
    --------
    >>> opts = SolverOptions(max_iters=10000, eps=1e-6)
    >>> opts.verbose
    1
    """
    max_iters: int = 2500
    verbose: int = 1
    normalize: int = 1
    scale: float = 5.0
    eps: float = 1e-3
    cg_rate: float = 2.0
    alpha: float = 1.8
    rho_x: float = 1e-3

    def __repr__(self):
        return (f"SolverOptions(max_iters={self.max_iters}, "
                f"verbose={self.verbose}, "
                f"eps={self.eps}, "
                f"alpha={self.alpha})")

    @classmethod
    def from_dict(cls, d: Optional[Mapping[str, Any]]) -> 'SolverOptions':
        """Create SolverOptions from dictionary, validating every known key"""
        return parse_options(d)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {f.name: getattr(self, f.name) for f in fields(self)}


def _is_integral(value: Any) -> bool:
    return isinstance(value, (numbers.Integral, np.integer, np.bool_))


def _int_option(key: str, value: Any) -> int:
    if not _is_integral(value) or value < 0:
        raise OptionFieldError(key, f"'{key}' ought to be a nonnegative integer")
    return int(value)


def _float_option(key: str, value: Any) -> float:
    # ints are accepted where a float is expected
    if _is_integral(value):
        result = float(int(value))
    elif isinstance(value, (numbers.Real, np.floating)):
        result = float(value)
    else:
        raise OptionFieldError(key, f"'{key}' ought to be a nonnegative float")
    if math.isnan(result) or result < 0:
        raise OptionFieldError(key, f"'{key}' ought to be a nonnegative float")
    return result


def parse_options(opts: Optional[Mapping[str, Any]]) -> SolverOptions:
    """
    Merge caller overrides with the default options.

    Keys are matched case-insensitively, so ``'MAX_ITERS'`` and
    ``'max_iters'`` name the same option. Unknown keys are ignored.

    Parameters
    ----------
    opts : mapping or None
        Option overrides

    Returns
    -------
    SolverOptions

    Raises
    ------
    OptionFieldError
        If a known option is non-numeric or negative
    """
    if opts is None:
        return SolverOptions()
    if not isinstance(opts, Mapping):
        raise OptionFieldError('opts', "opts must be a dictionary")

    normalized = {}
    for key, value in opts.items():
        if isinstance(key, str):
            normalized[key.lower()] = value

    unknown = set(normalized) - set(INT_OPTIONS) - set(FLOAT_OPTIONS)
    if unknown:
        logger.debug("Ignoring unknown option(s): %s", sorted(unknown))

    values = {}
    for key in INT_OPTIONS:
        if key in normalized:
            values[key] = _int_option(key, normalized[key])
    for key in FLOAT_OPTIONS:
        if key in normalized:
            values[key] = _float_option(key, normalized[key])
    return SolverOptions(**values)
