import numpy as np
import pytest

from conebridge.backends import SolverBackend


class RecordingBackend(SolverBackend):
    """Stands in for the native solver and records what reached it."""
    name = 'recording'

    def __init__(self, index_bytes=4, solve_time_ms=250.0, setup_time_ms=12.0):
        self.index_bytes = index_bytes
        self.solve_time_ms = solve_time_ms
        self.setup_time_ms = setup_time_ms
        self.calls = []
        self.last_output = None

    def solve(self, problem, cone, options, warm_start):
        self.calls.append((problem, cone, options, warm_start))
        # hand back the solver's own buffers, as a native solver would
        out = {
            'x': warm_start.x,
            'y': warm_start.y,
            's': warm_start.s,
        }
        self.last_output = out
        info = {
            'status_val': 1,
            'iter': 42,
            'pobj': 2.0,
            'dobj': 2.0,
            'res_pri': 1e-9,
            'res_dual': 2e-9,
            'rel_gap': 3e-10,
            'solve_time': self.solve_time_ms,
            'setup_time': self.setup_time_ms,
            'status': 'Solved',
        }
        return out, info


@pytest.fixture
def backend():
    return RecordingBackend()


def identity_problem():
    """2x2 identity in CSC form with b = c = [1, 1]"""
    return dict(
        shape=(2, 2),
        Ax=np.array([1.0, 1.0]),
        Ai=np.array([0, 1]),
        Ap=np.array([0, 1, 2]),
        b=np.array([1.0, 1.0]),
        c=np.array([1.0, 1.0]),
    )


@pytest.fixture
def problem_data():
    return identity_problem()
