import numpy as np
import pytest

from conebridge.lifecycle import Workspace


def test_release_on_success():
    with Workspace() as ws:
        ws.track('b', np.zeros(3))
        ws.track('c', np.zeros(2), copied=False)
        assert ws.live == 2
    assert ws.live == 0
    assert ws.allocated == ws.released == 2
    assert ws.copies == 1


def test_release_on_failure():
    ws = Workspace()
    with pytest.raises(ValueError):
        with ws:
            ws.track('Ax', np.zeros(4))
            raise ValueError("boom")
    assert ws.is_released
    assert ws.allocated == ws.released == 1


def test_release_happens_once():
    ws = Workspace()
    ws.track('x', np.zeros(1))
    ws.release()
    ws.release()
    assert ws.released == 1


def test_track_after_release_fails():
    ws = Workspace()
    ws.release()
    with pytest.raises(RuntimeError):
        ws.track('x', np.zeros(1))


def test_duplicate_names_rejected():
    ws = Workspace()
    ws.track('x', np.zeros(1))
    with pytest.raises(RuntimeError):
        ws.track('x', np.zeros(1))
