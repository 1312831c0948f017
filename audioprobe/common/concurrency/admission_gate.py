from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator

log = logging.getLogger(__name__)


@dataclass
class GateStats:
    capacity: int
    admitted: int = 0
    released: int = 0
    peak_in_flight: int = 0

    @property
    def in_flight(self) -> int:
        return max(0, self.admitted - self.released)


class AdmissionGate:
    """
    Fixed-capacity admission gate in front of blocking work (ffprobe runs).

    Features
    --------
    - acquire() blocks until one of `capacity` slots is free, then reserves it
    - release() hands the slot back; exactly once per acquire()
    - slot() context manager pairing the two around a block, released on every exit path
    - Stats snapshot (capacity, in-flight, peak)

    Notes
    -----
    - Waiters are not served in arrival order; whichever thread the semaphore
      wakes goes first. There is no timeout and no cancellation.
    - Backed by a BoundedSemaphore, so an unmatched release() raises ValueError
      instead of silently growing the capacity.
    """

    def __init__(self, capacity: int, *, name: str = "ffprobe") -> None:
        """
        Parameters
        ----------
        capacity:
            Max number of holders at once (K). Fixed for the life of the gate.
        name:
            Logical name for logging.
        """
        if capacity < 1:
            raise ValueError(f"{name}: gate capacity must be >= 1, got {capacity}")

        self._name = name
        self._capacity = capacity
        self._slots = threading.BoundedSemaphore(capacity)
        self._stats = GateStats(capacity=capacity)
        self._lock = threading.Lock()

    @property
    def capacity(self) -> int:
        return self._capacity

    def stats(self) -> GateStats:
        """Return a *snapshot* of current stats."""
        with self._lock:
            return GateStats(
                capacity=self._stats.capacity,
                admitted=self._stats.admitted,
                released=self._stats.released,
                peak_in_flight=self._stats.peak_in_flight,
            )

    # -------------------------
    # Acquire / release
    # -------------------------
    def acquire(self) -> None:
        """Block until a slot is free, then take it."""
        if not self._slots.acquire(blocking=False):
            log.debug("%s gate full (%d in flight), waiting for a slot", self._name, self._capacity)
            self._slots.acquire()

        with self._lock:
            self._stats.admitted += 1
            self._stats.peak_in_flight = max(self._stats.peak_in_flight, self._stats.in_flight)

    def release(self) -> None:
        """Return a slot taken by acquire()."""
        with self._lock:
            if self._stats.in_flight == 0:
                raise ValueError(f"{self._name}: release() without a matching acquire()")
            self._stats.released += 1
        self._slots.release()

    @contextmanager
    def slot(self) -> Iterator[None]:
        """
        Hold one slot for the duration of the block:

            with gate.slot():
                ...  # at most `capacity` threads are in here
        """
        self.acquire()
        try:
            yield
        finally:
            # release the slot when the block *finishes*, success or error
            self.release()
