"""
Buffer ownership for a single solve call
"""
import logging
import numpy as np
from typing import Dict


logger = logging.getLogger(__name__)


class Workspace:
    """
    Tracks every buffer built while parsing one solve call.

    All buffers registered with :meth:`track` are released together, exactly
    once, by :meth:`release`. Used as a context manager the release happens on
    every exit path, whether the call returned a solution or an input check
    failed half way through.

    Attributes
    ----------
    allocated : int
        Number of buffers registered so far
    released : int
        Number of buffers released so far
    copies : int
        Number of registered buffers that were fresh allocations rather than
        the caller's own arrays

    Examples
    --------
    >>> with Workspace() as ws:
    ...     b = ws.track('b', np.zeros(3))
    >>> ws.live
    0
    """

    def __init__(self):
        self._buffers: Dict[str, np.ndarray] = {}
        self._released = False
        self.allocated = 0
        self.released = 0
        self.copies = 0

    @property
    def live(self) -> int:
        """Number of buffers still held"""
        return len(self._buffers)

    @property
    def is_released(self) -> bool:
        return self._released

    def track(self, name: str, buffer: np.ndarray, copied: bool = True) -> np.ndarray:
        """
        Register a buffer under ``name`` and hand it back.

        Parameters
        ----------
        name : str
            Field the buffer belongs to, e.g. ``'Ax'`` or ``'cone.q'``
        buffer : np.ndarray
            The buffer
        copied : bool
            Whether the buffer was allocated for this call

        Returns
        -------
        np.ndarray
            ``buffer``, unchanged
        """
        if self._released:
            raise RuntimeError(f"Cannot track '{name}': workspace has been released")
        if name in self._buffers:
            raise RuntimeError(f"Buffer '{name}' is already tracked")
        self._buffers[name] = buffer
        self.allocated += 1
        if copied:
            self.copies += 1
        return buffer

    def __contains__(self, name: str) -> bool:
        return name in self._buffers

    def release(self):
        """
        Release every tracked buffer.

        After calling this method, the workspace cannot track anything else.
        Calling it again does nothing.
        """
        if self._released:
            return
        count = len(self._buffers)
        self._buffers.clear()
        self.released += count
        self._released = True
        logger.debug("Released %d buffer(s) (%d copied)", count, self.copies)

    def __enter__(self):
        """Context manager entry"""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit - release everything tracked so far"""
        if exc_type is not None:
            logger.debug("Tearing down partial state after %s", exc_type.__name__)
        self.release()
        return False

    def __repr__(self):
        if self._released:
            return f"<Workspace (released {self.released})>"
        return f"<Workspace live={self.live}>"
