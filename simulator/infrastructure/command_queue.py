"""
CommandQueue

Bridges driver threads (interactive console, HTTP API) into the SimPy
thread. Drivers submit callables; a SimPy process drains the queue every
poll interval and runs them inside the simulation, so simulation state is
only ever mutated by the thread that steps the environment.
"""

import queue
from concurrent.futures import Future
from typing import Any, Callable, Optional

import simpy


class CommandQueue:
    """
    Thread-safe command inbox executed inside the simulation.

    Args:
        env: SimPy environment the commands run against
        poll_interval: Simulated seconds between queue checks
    """

    def __init__(self, env: simpy.Environment, poll_interval: float = 0.05):
        if poll_interval <= 0:
            raise ValueError("poll_interval must be positive")
        self.env = env
        self.poll_interval = poll_interval
        self._queue = queue.Queue()  # Thread-safe queue for cross-thread communication
        self._process = self.env.process(self.run())

    def submit(self, func: Callable[..., Any], *args, **kwargs) -> Future:
        """Queue func(*args, **kwargs); the returned future carries its outcome."""
        future = Future()
        self._queue.put((future, func, args, kwargs))
        return future

    def call(self, func: Callable[..., Any], *args, timeout: Optional[float] = 5.0, **kwargs) -> Any:
        """Submit and block until the simulation has executed the command."""
        return self.submit(func, *args, **kwargs).result(timeout=timeout)

    def pending(self) -> int:
        return self._queue.qsize()

    def drain(self):
        """Execute every queued command now."""
        while True:
            try:
                future, func, args, kwargs = self._queue.get_nowait()
            except queue.Empty:
                return
            if not future.set_running_or_notify_cancel():
                continue
            try:
                result = func(*args, **kwargs)
            except Exception as exc:
                # Handed back to the submitting thread through the future
                future.set_exception(exc)
            else:
                future.set_result(result)

    def cancel_pending(self) -> int:
        """Cancel commands that will never run; returns how many were dropped."""
        cancelled = 0
        while True:
            try:
                future, _, _, _ = self._queue.get_nowait()
            except queue.Empty:
                return cancelled
            if future.cancel():
                cancelled += 1

    def run(self):
        while True:
            self.drain()
            yield self.env.timeout(self.poll_interval)
