"""Elapsed-time measurement for the search debug log."""

from __future__ import annotations

import time


class Timer:
    """Measures one search call for the pipeline's debug line.

    Usable as a context manager; `elapsed_ms` reads the running time while
    the block is open and the final time once it has exited.
    """

    def __init__(self) -> None:
        self._started_ns: int | None = None
        self._stopped_ns: int | None = None

    def __enter__(self) -> "Timer":
        self._started_ns = time.perf_counter_ns()
        self._stopped_ns = None
        return self

    def __exit__(self, exc_type: object, exc: object, tb: object) -> None:
        self._stopped_ns = time.perf_counter_ns()

    @property
    def elapsed_ms(self) -> float:
        if self._started_ns is None:
            return 0.0
        end = self._stopped_ns if self._stopped_ns is not None else time.perf_counter_ns()
        return (end - self._started_ns) / 1_000_000
