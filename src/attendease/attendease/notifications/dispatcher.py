"""Outbound side-effect dispatch (emails, in-app notifications, alert fan-out).

Callers hand work to a dispatcher and return immediately. Task failures are
logged here and never reach the caller.
"""
from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from threading import BoundedSemaphore
from typing import Any, Callable, Optional, Protocol

logger = logging.getLogger(__name__)


def _run_safely(task_name: str, fn: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
    try:
        return fn(*args, **kwargs)
    except Exception:
        logger.exception("Outbound task %s failed", task_name)
        return None


class OutboundDispatcher(Protocol):
    def submit(self, task_name: str, fn: Callable[..., Any], *args: Any, **kwargs: Any) -> None:
        raise NotImplementedError


class InlineDispatcher:
    """Runs tasks on the calling thread. Used by tests and one-off scripts."""

    def submit(self, task_name: str, fn: Callable[..., Any], *args: Any, **kwargs: Any) -> None:
        _run_safely(task_name, fn, *args, **kwargs)


class ThreadPoolDispatcher:
    """Bounded worker pool with a cap on queued tasks.

    When ``max_pending`` tasks are already waiting, new tasks are dropped with
    a warning instead of blocking the request thread.
    """

    def __init__(self, *, max_workers: int = 4, max_pending: int = 100):
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="outbound")
        self._slots = BoundedSemaphore(max_pending)

    def submit(self, task_name: str, fn: Callable[..., Any], *args: Any, **kwargs: Any) -> Optional[Future]:
        if not self._slots.acquire(blocking=False):
            logger.warning("Outbound queue full, dropping task %s", task_name)
            return None

        try:
            future = self._executor.submit(self._run_and_release, task_name, fn, *args, **kwargs)
        except RuntimeError:
            self._slots.release()
            logger.warning("Dispatcher shut down, dropping task %s", task_name)
            return None

        return future

    def _run_and_release(self, task_name: str, fn: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
        try:
            return _run_safely(task_name, fn, *args, **kwargs)
        finally:
            self._slots.release()

    def shutdown(self, *, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)
