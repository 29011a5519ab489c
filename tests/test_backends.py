import enum
import sys
import types

import numpy as np
import pytest

from conebridge.backends import ScsBackend, SolverBackend, get_backend
from conebridge.cones import ConeSpec
from conebridge.parameters import SolverOptions

from conftest import RecordingBackend


def test_instances_pass_through():
    backend = RecordingBackend()
    assert get_backend(backend) is backend


def test_objects_without_solve_rejected():
    with pytest.raises(TypeError):
        get_backend(object())


def test_base_backend_is_abstract():
    with pytest.raises(NotImplementedError):
        SolverBackend().solve(None, None, None, None)


def test_scs_cone_uses_zero_cone_key():
    spec = ConeSpec(1, 2, np.array([3]), np.array([], dtype=np.int32), 1, 0)
    assert ScsBackend.cone_dict(spec) == {
        'z': 1, 'l': 2, 'q': [3], 's': [], 'ep': 1, 'ed': 0,
    }


def test_scs_end_to_end():
    pytest.importorskip("scs")
    from conebridge import csolve

    # minimize x1 + x2 subject to x >= 1
    sol = csolve(
        (2, 2),
        np.array([-1.0, -1.0]), np.array([0, 1]), np.array([0, 1, 2]),
        np.array([-1.0, -1.0]), np.array([1.0, 1.0]),
        {'l': 2},
        opts={'verbose': 0, 'eps': 1e-6},
        backend='scs',
    )
    assert sol.info.status_val == 1
    np.testing.assert_allclose(sol.x, [1.0, 1.0], atol=1e-4)
    assert sol.info.pobj == pytest.approx(2.0, abs=1e-4)


def fake_scs(with_linear_solver):
    module = types.ModuleType('scs')
    if with_linear_solver:
        module.LinearSolver = enum.Enum('LinearSolver', ['AUTO', 'QDLDL', 'INDIRECT'])
    return module


@pytest.mark.parametrize("use_indirect", [False, True])
def test_settings_for_linear_solver_releases(monkeypatch, use_indirect):
    module = fake_scs(with_linear_solver=True)
    monkeypatch.setitem(sys.modules, 'scs', module)
    settings = ScsBackend(use_indirect=use_indirect).settings(SolverOptions(verbose=0, eps=1e-5))
    assert 'use_indirect' not in settings
    assert 'cg_rate' not in settings
    assert settings['verbose'] is False
    assert settings['eps_abs'] == settings['eps_rel'] == 1e-5
    if use_indirect:
        assert settings['linear_solver'] is module.LinearSolver.INDIRECT
    else:
        assert 'linear_solver' not in settings


def test_settings_for_legacy_releases(monkeypatch):
    monkeypatch.setitem(sys.modules, 'scs', fake_scs(with_linear_solver=False))
    assert 'use_indirect' not in ScsBackend().settings(SolverOptions())
    settings = ScsBackend(use_indirect=True).settings(SolverOptions())
    assert settings['use_indirect'] is True
    assert 'linear_solver' not in settings


def test_installed_scs_accepts_settings():
    scs = pytest.importorskip("scs")
    from scipy import sparse

    settings = ScsBackend().settings(SolverOptions(verbose=0, eps=1e-5))
    data = {
        'A': sparse.csc_matrix(-np.eye(2)),
        'b': -np.ones(2),
        'c': np.ones(2),
    }
    out = scs.SCS(data, {'l': 2}, **settings).solve()
    assert out['info']['status_val'] == 1


def test_scs_sdp_end_to_end():
    pytest.importorskip("scs")
    from conebridge import csolve

    # minimize trace(X) over the 2x2 PSD cone, X stored as (x11, sqrt2*x21, x22)
    sol = csolve(
        (3, 3),
        np.array([-1.0, -1.0, -1.0]), np.array([0, 1, 2]), np.array([0, 1, 2, 3]),
        np.zeros(3), np.array([1.0, 0.0, 1.0]),
        {'s': 2},
        opts={'verbose': 0},
        backend='scs',
    )
    assert sol.info.status_val == 1
    assert len(sol.x) == 3 and len(sol.y) == len(sol.s) == 3


def test_scs_gap_passed_through_as_rel_gap(monkeypatch):
    module = fake_scs(with_linear_solver=True)
    seen = {}

    class SCS:
        def __init__(self, data, cone, **settings):
            seen['cone'] = cone
            seen['settings'] = settings
            self.m, self.n = data['A'].shape

        def solve(self, warm_start=True, x=None, y=None, s=None):
            seen['warm_start'] = warm_start
            info = {
                'status_val': 1, 'iter': 7, 'pobj': 2.0, 'dobj': 1.5,
                'res_pri': 1e-9, 'res_dual': 1e-9, 'gap': 0.5,
                'solve_time': 3.0, 'setup_time': 1.0, 'status': 'solved',
            }
            return {'x': np.ones(self.n), 'y': np.zeros(self.m), 's': np.zeros(self.m), 'info': info}

    module.SCS = SCS
    monkeypatch.setitem(sys.modules, 'scs', module)
    from conebridge import csolve

    sol = csolve(
        (2, 2),
        np.array([-1.0, -1.0]), np.array([0, 1]), np.array([0, 1, 2]),
        np.array([-1.0, -1.0]), np.array([1.0, 1.0]),
        {'l': 2}, backend='scs',
    )
    assert sol.info.rel_gap == 0.5
    assert sol.info.solve_time == pytest.approx(0.003)
    assert seen['cone']['l'] == 2 and seen['cone']['z'] == 0
    assert 'use_indirect' not in seen['settings']
    assert seen['warm_start'] is False
