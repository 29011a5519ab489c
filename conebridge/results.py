"""
Solution and diagnostics returned by conebridge
"""
import numpy as np
from typing import Any, Dict, Mapping

from .exceptions import SolverError


class Diagnostics:
    """
    Convergence and timing information reported by the solver.

    Attributes
    ----------
    status_val : int
        Numeric solver status (1 means solved)
    iter : int
        Number of iterations taken
    pobj : float
        Primal objective value (c'*x)
    dobj : float
        Dual objective value (-b'*y)
    res_pri : float
        Primal residual
    res_dual : float
        Dual residual
    rel_gap : float
        Relative duality gap
    solve_time : float
        Solve time in seconds
    setup_time : float
        Setup time in seconds
    status : str
        Solver status text ('Solved', 'Infeasible', ...)
    """

    def __init__(self):
        self.status_val: int = 0
        self.iter: int = 0
        self.pobj: float = float('nan')
        self.dobj: float = float('nan')
        self.res_pri: float = float('inf')
        self.res_dual: float = float('inf')
        self.rel_gap: float = float('inf')
        self.solve_time: float = 0.0
        self.setup_time: float = 0.0
        self.status: str = "Unknown"

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any]) -> 'Diagnostics':
        """
        Create Diagnostics from a backend info mapping.

        Backends report times in milliseconds; they are stored in seconds.
        """
        info = cls()
        try:
            info.status_val = int(raw['status_val'])
            info.iter = int(raw['iter'])
            info.pobj = float(raw['pobj'])
            info.dobj = float(raw['dobj'])
            info.res_pri = float(raw['res_pri'])
            info.res_dual = float(raw['res_dual'])
            info.rel_gap = float(raw['rel_gap'])
            info.solve_time = float(raw['solve_time']) / 1e3
            info.setup_time = float(raw['setup_time']) / 1e3
            info.status = str(raw['status'])
        except KeyError as e:
            raise SolverError(f"solver info is missing field {e}") from None
        except (TypeError, ValueError) as e:
            raise SolverError(f"solver info holds a malformed value: {e}") from None
        return info

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the camelCase info dictionary returned by csolve"""
        return {
            'statusVal': self.status_val,
            'iter': self.iter,
            'pobj': self.pobj,
            'dobj': self.dobj,
            'resPri': self.res_pri,
            'resDual': self.res_dual,
            'relGap': self.rel_gap,
            'solveTime': self.solve_time,
            'setupTime': self.setup_time,
            'status': self.status,
        }

    def __repr__(self):
        return (f"Diagnostics(status='{self.status}', "
                f"iter={self.iter}, "
                f"solve_time={self.solve_time:.3f}s)")


def copy_vector(name: str, raw: Any, length: int) -> np.ndarray:
    """Deep copy a solver-owned vector into a new float64 array"""
    if raw is None:
        raise SolverError(f"solver returned no '{name}' vector")
    vec = np.array(raw, dtype=np.float64, copy=True).reshape(-1)
    if vec.shape[0] != length:
        raise SolverError(
            f"solver returned '{name}' of length {vec.shape[0]}, expected {length}"
        )
    return vec


class Solution:
    """
    Solution of a cone problem.

    The vectors are copies owned by the caller; nothing here aliases memory
    owned by the solver.

    Attributes
    ----------
    x : np.ndarray
        Primal solution (length n)
    y : np.ndarray
        Dual solution (length m)
    s : np.ndarray
        Primal slack (length m)
    info : Diagnostics
        Solver diagnostics

    Methods
    -------
    is_optimal()
        Check if solution is optimal
    to_dict()
        Convert to the ``{'x', 'y', 's', 'info'}`` dictionary
    """

    def __init__(self, x: np.ndarray, y: np.ndarray, s: np.ndarray, info: Diagnostics):
        self.x = x
        self.y = y
        self.s = s
        self.info = info

    def is_optimal(self) -> bool:
        """Check if solution is optimal"""
        return self.info.status_val == 1

    @classmethod
    def from_raw(
        cls,
        raw_solution: Mapping[str, Any],
        raw_info: Mapping[str, Any],
        rows: int,
        cols: int,
    ) -> 'Solution':
        """Create Solution by deep copying backend output"""
        x = copy_vector('x', raw_solution.get('x'), cols)
        y = copy_vector('y', raw_solution.get('y'), rows)
        s = copy_vector('s', raw_solution.get('s'), rows)
        return cls(x, y, s, Diagnostics.from_raw(raw_info))

    def __repr__(self):
        return (f"Solution(status='{self.info.status}', "
                f"iter={self.info.iter}, "
                f"n={len(self.x)}, m={len(self.y)})")

    def __str__(self):
        info = self.info
        lines = [
            "Cone Solver Results",
            "=" * 50,
            f"Status:          {info.status}",
            f"Primal Obj:      {info.pobj:.6e}",
            f"Dual Obj:        {info.dobj:.6e}",
            f"Rel Gap:         {info.rel_gap:.6e}",
            f"Primal Residual: {info.res_pri:.6e}",
            f"Dual Residual:   {info.res_dual:.6e}",
            f"Iterations:      {info.iter}",
            f"Setup Time:      {info.setup_time:.3f} seconds",
            f"Solve Time:      {info.solve_time:.3f} seconds",
            f"Variables:       {len(self.x)}",
            f"Constraints:     {len(self.y)}",
        ]
        return "\n".join(lines)

    def to_dict(self) -> Dict[str, Any]:
        """Convert results to dictionary"""
        return {
            'x': self.x,
            'y': self.y,
            's': self.s,
            'info': self.info.to_dict(),
        }
