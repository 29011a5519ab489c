"""
Cone specification parsing

A cone is described by a mapping with the optional keys

    f   : size of the free (zero) cone
    l   : size of the nonnegative orthant
    q   : second-order cone sizes, an int or a list of ints
    s   : semidefinite cone sizes (matrix dimension), an int or a list of ints
    ep  : number of primal exponential cones
    ed  : number of dual exponential cones
"""
import logging
import numbers
import numpy as np
from typing import Any, Dict, Mapping, Optional

from .buffers import TypeConfig
from .exceptions import ConeFieldError
from .lifecycle import Workspace


logger = logging.getLogger(__name__)

SCALAR_FIELDS = ('f', 'l', 'ep', 'ed')
ARRAY_FIELDS = ('q', 's')


class ConeSpec:
    """
    Canonical cone description.

    ``soc_sizes`` and ``sdc_sizes`` are always integer arrays, empty when the
    caller gave no such cones.

    Attributes
    ----------
    free_size : int
        Size of the free cone
    nonneg_size : int
        Size of the nonnegative orthant
    soc_sizes : np.ndarray
        Sizes of the second-order cones
    sdc_sizes : np.ndarray
        Matrix dimensions of the semidefinite cones
    exp_primal_count : int
        Number of primal exponential cones
    exp_dual_count : int
        Number of dual exponential cones
    """

    def __init__(
        self,
        free_size: int,
        nonneg_size: int,
        soc_sizes: np.ndarray,
        sdc_sizes: np.ndarray,
        exp_primal_count: int,
        exp_dual_count: int,
    ):
        self.free_size = free_size
        self.nonneg_size = nonneg_size
        self.soc_sizes = soc_sizes
        self.sdc_sizes = sdc_sizes
        self.exp_primal_count = exp_primal_count
        self.exp_dual_count = exp_dual_count

    @property
    def total_dim(self) -> int:
        """Length of the slack vector covered by this cone"""
        sdc = sum(int(k) * (int(k) + 1) // 2 for k in self.sdc_sizes)
        return (
            self.free_size
            + self.nonneg_size
            + int(np.sum(self.soc_sizes))
            + sdc
            + 3 * (self.exp_primal_count + self.exp_dual_count)
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the solver's cone dictionary"""
        return {
            'f': self.free_size,
            'l': self.nonneg_size,
            'q': self.soc_sizes.tolist(),
            's': self.sdc_sizes.tolist(),
            'ep': self.exp_primal_count,
            'ed': self.exp_dual_count,
        }

    def __eq__(self, other):
        if not isinstance(other, ConeSpec):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self):
        return (f"ConeSpec(f={self.free_size}, l={self.nonneg_size}, "
                f"q={self.soc_sizes.tolist()}, s={self.sdc_sizes.tolist()}, "
                f"ep={self.exp_primal_count}, ed={self.exp_dual_count})")


def _is_count(value: Any, dtype) -> bool:
    return (
        isinstance(value, (numbers.Integral, np.integer))
        and not isinstance(value, (bool, np.bool_))
        and 0 <= value <= np.iinfo(dtype).max
    )


def _scalar_field(cone: Mapping, key: str, dtype) -> int:
    value = cone.get(key)
    if value is None:
        return 0
    if not _is_count(value, dtype):
        raise ConeFieldError(key)
    return int(value)


def _array_field(cone: Mapping, key: str, dtype) -> np.ndarray:
    value = cone.get(key)
    if value is None:
        return np.zeros(0, dtype=dtype)

    # one cone of size k may be written as k instead of [k]
    if _is_count(value, dtype):
        return np.array([value], dtype=dtype)

    if isinstance(value, np.ndarray):
        if value.ndim != 1:
            raise ConeFieldError(key)
        items = value.tolist()
    elif isinstance(value, (list, tuple)):
        items = value
    else:
        raise ConeFieldError(key)

    sizes = np.zeros(len(items), dtype=dtype)
    for i, item in enumerate(items):
        if not _is_count(item, dtype):
            raise ConeFieldError(key, f"failed to parse cone field {key} (entry {i})")
        sizes[i] = item
    return sizes


def parse_cone(
    cone: Optional[Mapping],
    workspace: Workspace,
    types: TypeConfig,
) -> ConeSpec:
    """
    Normalize a cone mapping into a :class:`ConeSpec`.

    Parameters
    ----------
    cone : mapping or None
        Cone description; ``None`` means an empty cone
    workspace : Workspace
        Receives the ``q`` and ``s`` size arrays
    types : TypeConfig
        Element types for this call

    Returns
    -------
    ConeSpec

    Raises
    ------
    ConeFieldError
        If a field is negative, non-integral, or of an unsupported shape
    """
    if cone is None:
        cone = {}
    if not isinstance(cone, Mapping):
        raise ConeFieldError('cone', "cone must be a dictionary")

    unknown = set(cone) - set(SCALAR_FIELDS) - set(ARRAY_FIELDS)
    if unknown:
        logger.debug("Ignoring unknown cone field(s): %s", sorted(unknown))

    free_size = _scalar_field(cone, 'f', types.index_dtype)
    nonneg_size = _scalar_field(cone, 'l', types.index_dtype)
    soc_sizes = workspace.track('cone.q', _array_field(cone, 'q', types.index_dtype))
    sdc_sizes = workspace.track('cone.s', _array_field(cone, 's', types.index_dtype))
    exp_primal_count = _scalar_field(cone, 'ep', types.index_dtype)
    exp_dual_count = _scalar_field(cone, 'ed', types.index_dtype)

    return ConeSpec(
        free_size, nonneg_size, soc_sizes, sdc_sizes,
        exp_primal_count, exp_dual_count,
    )
