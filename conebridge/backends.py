"""
Solver backends for conebridge

A backend is the native solver behind the validation layer. It receives a
fully validated problem and returns the solver's own output, which conebridge
then deep copies. Backends report times in milliseconds using the info keys

    status_val, iter, pobj, dobj, res_pri, res_dual, rel_gap,
    solve_time, setup_time, status
"""
import logging
from typing import Any, Dict, Mapping, Tuple, Union

from .cones import ConeSpec
from .model import Problem
from .parameters import SolverOptions
from .warmstart import WarmStart


logger = logging.getLogger(__name__)


class SolverBackend:
    """
    Interface of a native cone solver.

    Attributes
    ----------
    name : str
        Backend name
    index_bytes : int
        Width in bytes of the solver's integer index type
    """
    name = 'base'
    index_bytes = 4

    def solve(
        self,
        problem: Problem,
        cone: ConeSpec,
        options: SolverOptions,
        warm_start: WarmStart,
    ) -> Tuple[Mapping[str, Any], Mapping[str, Any]]:
        """
        Run the solver once.

        Returns
        -------
        (dict, dict)
            Solution vectors keyed by ``'x'``, ``'y'``, ``'s'`` and the info
            mapping described in the module docstring. Both may reference
            solver-owned memory.
        """
        raise NotImplementedError

    def __repr__(self):
        return f"<{type(self).__name__} name='{self.name}'>"


class ScsBackend(SolverBackend):
    """
    Backend driving the ``scs`` package.

    scs reports the absolute duality gap ``|pobj - dobj|`` as ``gap``; it is
    passed through unchanged as ``rel_gap``, so for this backend
    :attr:`Diagnostics.rel_gap` holds an absolute gap.

    Parameters
    ----------
    use_indirect : bool, optional
        Use the indirect (conjugate gradient) linear system solver
    """
    name = 'scs'
    index_bytes = 4

    def __init__(self, use_indirect: bool = False):
        self.use_indirect = use_indirect
        try:
            import scs
        except ImportError as e:
            raise ImportError(
                f"Failed to import the scs solver: {e}\n\n"
                f"Please install it, for example:\n"
                f"  python -m pip install conebridge[scs]\n"
            ) from e
        self._scs = scs

    def settings(self, options: SolverOptions) -> Dict[str, Any]:
        """Translate SolverOptions into scs keyword settings"""
        if options.cg_rate != SolverOptions.cg_rate:
            logger.debug("scs has no cg_rate setting; ignoring cg_rate=%s", options.cg_rate)
        settings = {
            'max_iters': options.max_iters,
            'verbose': bool(options.verbose),
            'normalize': bool(options.normalize),
            'scale': options.scale,
            'eps_abs': options.eps,
            'eps_rel': options.eps,
            'alpha': options.alpha,
            'rho_x': options.rho_x,
        }
        linear_solver = getattr(self._scs, 'LinearSolver', None)
        if linear_solver is not None:
            # scs >= 3.3 picks the linear system solver through linear_solver
            if self.use_indirect:
                settings['linear_solver'] = linear_solver.INDIRECT
        elif self.use_indirect:
            settings['use_indirect'] = True
        return settings

    @staticmethod
    def cone_dict(cone: ConeSpec) -> Dict[str, Any]:
        """Translate a ConeSpec into the scs cone dictionary"""
        return {
            'z': cone.free_size,
            'l': cone.nonneg_size,
            'q': cone.soc_sizes.tolist(),
            's': cone.sdc_sizes.tolist(),
            'ep': cone.exp_primal_count,
            'ed': cone.exp_dual_count,
        }

    def solve(self, problem, cone, options, warm_start):
        data = {
            'A': problem.A.to_scipy(problem.shape),
            'b': problem.b,
            'c': problem.c,
        }
        logger.debug("Calling scs on %r with %r", problem, cone)
        solver = self._scs.SCS(data, self.cone_dict(cone), **self.settings(options))
        if warm_start.enabled:
            out = solver.solve(warm_start=True, x=warm_start.x, y=warm_start.y, s=warm_start.s)
        else:
            out = solver.solve(warm_start=False)

        info = out['info']
        raw_info = {
            'status_val': info['status_val'],
            'iter': info['iter'],
            'pobj': info['pobj'],
            'dobj': info['dobj'],
            'res_pri': info['res_pri'],
            'res_dual': info['res_dual'],
            'rel_gap': info['gap'],
            'solve_time': info['solve_time'],
            'setup_time': info['setup_time'],
            'status': info['status'],
        }
        return out, raw_info


_BACKENDS = {
    'scs': ScsBackend,
}


def get_backend(backend: Union[str, SolverBackend, None] = None) -> SolverBackend:
    """
    Resolve a backend name or instance.

    Parameters
    ----------
    backend : str, SolverBackend or None
        ``None`` selects ``'scs'``

    Returns
    -------
    SolverBackend
    """
    if backend is None:
        backend = 'scs'
    if isinstance(backend, str):
        try:
            factory = _BACKENDS[backend.lower()]
        except KeyError:
            raise ValueError(
                f"Unknown backend '{backend}'. Available: {sorted(_BACKENDS)}"
            ) from None
        return factory()
    if not callable(getattr(backend, 'solve', None)):
        raise TypeError("backend must be a backend name or provide a solve() method")
    return backend
