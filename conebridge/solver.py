"""
High-level solver interface for conebridge
"""
import logging
import warnings
import numpy as np
from scipy import sparse
from typing import Any, Mapping, Optional, Tuple, Union

from .backends import SolverBackend, get_backend
from .buffers import TypeConfig
from .cones import parse_cone
from .lifecycle import Workspace
from .model import build_problem
from .parameters import parse_options
from .results import Solution
from .warmstart import load_warm_start


logger = logging.getLogger(__name__)


class ConeSolver:
    """
    Validating front end to a native cone solver.

    Solves problems of the form:

        minimize    c'*x
        subject to  A*x + s = b
                    s in K

    Every input is checked and coerced into the solver's layout before the
    backend is called. The backend's output is deep copied, so the returned
    :class:`Solution` never aliases solver memory.

    Parameters
    ----------
    backend : str or SolverBackend, optional
        Solver backend. If None, the ``scs`` backend is used.

    Examples
    --------
    >>> import numpy as np
    >>> from conebridge import ConeSolver
    >>>
    >>> solver = ConeSolver()
    >>> sol = solver.solve(
    ...     (2, 2),
    ...     np.array([1.0, 1.0]), np.array([0, 1]), np.array([0, 1, 2]),
    ...     np.array([1.0, 1.0]), np.array([1.0, 1.0]),
    ...     {'l': 2},
    ... )
    >>> print(sol.info.status)
    """

    def __init__(self, backend: Union[str, SolverBackend, None] = None):
        self.backend = get_backend(backend)

    def solve(
        self,
        shape: Tuple[int, int],
        Ax: Any,
        Ai: Any,
        Ap: Any,
        b: Any,
        c: Any,
        cone: Optional[Mapping[str, Any]] = None,
        opts: Optional[Mapping[str, Any]] = None,
        warm: Optional[Mapping[str, Any]] = None,
        workspace: Optional[Workspace] = None,
    ) -> Solution:
        """
        Solve a cone problem given in CSC form.

        Parameters
        ----------
        shape : (int, int)
            ``(m, n)``: rows of A (length of b) and columns of A (length of c)
        Ax : np.ndarray
            Nonzero values of A, floats
        Ai : np.ndarray
            Row indices of A, ints
        Ap : np.ndarray
            Column pointers of A, ints (length n+1)
        b : np.ndarray
            Constraint vector of floats (length m)
        c : np.ndarray
            Objective vector of floats (length n)
        cone : dict, optional
            Cone description with keys ``f``, ``l``, ``q``, ``s``, ``ep``, ``ed``
        opts : dict, optional
            Solver options, see :class:`SolverOptions`
        warm : dict, optional
            Warm-start vectors ``x`` (length n), ``y`` and ``s`` (length m)
        workspace : Workspace, optional
            Workspace that tracks the buffers of this call. A fresh one is
            used if None. It is always released before returning.

        Returns
        -------
        Solution
            Deep-copied solution vectors and diagnostics

        Raises
        ------
        ShapeError, DimensionMismatchError, ConeFieldError, OptionFieldError
            If the input is invalid. The backend is not called.
        SolverError
            If the backend returns vectors of the wrong length
        """
        # type selection is per call, never shared between calls
        types = TypeConfig.for_backend(self.backend)

        with (workspace if workspace is not None else Workspace()) as ws:
            problem = build_problem(shape, Ax, Ai, Ap, b, c, ws, types)
            cone_spec = parse_cone(cone, ws, types)
            options = parse_options(opts)
            warm_start = load_warm_start(warm, problem.rows, problem.cols, ws, types)
            if cone_spec.total_dim != problem.rows:
                logger.debug(
                    "Cone covers %d slack entries but A has %d rows",
                    cone_spec.total_dim, problem.rows,
                )

            logger.debug(
                "Solving %r with %r (warm start %s)",
                problem, cone_spec, "on" if warm_start.enabled else "off",
            )
            raw_solution, raw_info = self.backend.solve(problem, cone_spec, options, warm_start)
            return Solution.from_raw(raw_solution, raw_info, problem.rows, problem.cols)


def csolve(
    shape: Tuple[int, int],
    Ax: Any,
    Ai: Any,
    Ap: Any,
    b: Any,
    c: Any,
    cone: Optional[Mapping[str, Any]] = None,
    opts: Optional[Mapping[str, Any]] = None,
    warm: Optional[Mapping[str, Any]] = None,
    backend: Union[str, SolverBackend, None] = None,
) -> Solution:
    """
    Convenience function to solve a cone problem in CSC form without creating
    a solver object.

    See :meth:`ConeSolver.solve` for the parameters.

    Examples
    --------
    >>> sol = csolve((m, n), A.data, A.indices, A.indptr, b, c, {'l': m})
    >>> sol.to_dict()['info']['status']
    """
    solver = ConeSolver(backend=backend)
    return solver.solve(shape, Ax, Ai, Ap, b, c, cone, opts, warm)


def solve(
    data: Mapping[str, Any],
    cone: Optional[Mapping[str, Any]] = None,
    backend: Union[str, SolverBackend, None] = None,
    **opts,
) -> Solution:
    """
    Solve a cone problem given as a data dictionary.

    Parameters
    ----------
    data : dict
        Problem data with keys ``'A'`` (scipy sparse matrix or dense numpy
        array), ``'b'`` and ``'c'``, and optionally warm-start vectors
        ``'x'``, ``'y'``, ``'s'``
    cone : dict, optional
        Cone description
    backend : str or SolverBackend, optional
        Solver backend. If None, the ``scs`` backend is used.
    **opts
        Solver options, e.g. ``max_iters=5000, eps=1e-6``

    Returns
    -------
    Solution

    Examples
    --------
    >>> import numpy as np
    >>> from scipy import sparse
    >>> from conebridge import solve
    >>>
    >>> A = sparse.csc_matrix([[-1.0, 0.0], [0.0, -1.0]])
    >>> data = {'A': A, 'b': np.zeros(2), 'c': np.array([1.0, 1.0])}
    >>> sol = solve(data, {'l': 2}, eps=1e-6)
    """
    if 'A' not in data or 'b' not in data or 'c' not in data:
        raise TypeError("Missing one or more of A, b, c from data dictionary")
    A = data['A']
    b = data['b']
    c = data['c']
    if A is None or b is None or c is None:
        raise TypeError("Incomplete data specification")

    if sparse.issparse(A):
        if A.format != 'csc':
            warnings.warn("Converting A to a CSC (compressed sparse column) matrix; may take a while.")
            A = A.tocsc()
    elif isinstance(A, np.ndarray):
        if A.ndim != 2:
            raise TypeError("A must be a two-dimensional array")
        A = sparse.csc_matrix(A)
    else:
        raise TypeError("A must be a numpy array or scipy sparse matrix")

    if sparse.issparse(b):
        b = b.toarray().ravel()
    if sparse.issparse(c):
        c = c.toarray().ravel()

    warm = {key: data[key] for key in ('x', 'y', 's') if key in data}

    m, n = A.shape
    return csolve(
        (m, n), A.data.astype(np.float64, copy=False), A.indices, A.indptr, b, c, cone,
        opts=opts, warm=warm, backend=backend,
    )
