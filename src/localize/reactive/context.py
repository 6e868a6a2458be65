"""Execution contexts for UI-visible notifications.

Reactive bindings are not thread-safe. They are owned by one execution
context (a UI thread, an event loop) and every invalidation they see must
happen there. An ExecutionContext answers "am I on the owner?" and
accepts tasks to run on the owner.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import asyncio
import logging
import queue
import threading
from collections.abc import Callable
from typing import Protocol, runtime_checkable

__all__ = [
    "AsyncioExecutionContext",
    "ExecutionContext",
    "QueueExecutionContext",
    "run_on_owner",
]

logger = logging.getLogger(__name__)

type Task = Callable[[], None]


@runtime_checkable
class ExecutionContext(Protocol):
    """The single designated owner of binding notifications."""

    def is_owner(self) -> bool:
        """Return True if the calling thread is the owner."""

    def run(self, task: Task) -> None:
        """Schedule ``task`` on the owner.

        Raises:
            RuntimeError: If the context can no longer run tasks
        """


def run_on_owner(context: ExecutionContext | None, task: Task) -> None:
    """Run ``task`` on the owner of ``context``.

    Runs inline when there is no context or the caller already is the
    owner. Otherwise the task is handed to ``context.run``; if the context
    is unavailable (it raises RuntimeError) the task runs inline instead
    of being dropped.
    """
    if context is None or context.is_owner():
        task()
        return
    try:
        context.run(task)
    except RuntimeError as e:
        logger.debug("Execution context unavailable (%s); running task inline", e)
        task()


class AsyncioExecutionContext:
    """Execution context owned by an asyncio event loop.

    The owner is whichever thread is running the loop. Tasks are scheduled
    with ``loop.call_soon_threadsafe``, which raises RuntimeError once the
    loop is closed.

    Example:
        >>> async def main() -> None:
        ...     l10n = create_reactive_localize(
        ...         "en",
        ...         default_locale="en",
        ...         context=AsyncioExecutionContext.from_running_loop(),
        ...     )
    """

    __slots__ = ("_loop",)

    def __init__(self, loop: asyncio.AbstractEventLoop) -> None:
        if loop is None:
            msg = "loop must not be None"
            raise TypeError(msg)
        self._loop = loop

    @classmethod
    def from_running_loop(cls) -> AsyncioExecutionContext:
        """Create a context for the loop running in the calling thread.

        Raises:
            RuntimeError: If no event loop is running
        """
        return cls(asyncio.get_running_loop())

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        """Event loop that owns notifications."""
        return self._loop

    def is_owner(self) -> bool:
        try:
            return asyncio.get_running_loop() is self._loop
        except RuntimeError:
            return False

    def run(self, task: Task) -> None:
        self._loop.call_soon_threadsafe(task)

    def __repr__(self) -> str:
        return f"AsyncioExecutionContext(loop={self._loop!r})"


class QueueExecutionContext:
    """Execution context owned by one thread draining a task queue.

    Tasks scheduled from other threads wait until the owner calls
    process_pending(). Suitable for simple main loops and for tests.

    Example:
        >>> context = QueueExecutionContext()
        >>> l10n = create_reactive_localize("en", default_locale="en", context=context)
        >>> worker = threading.Thread(target=l10n.set_locale, args=("de",))
        >>> worker.start(); worker.join()
        >>> context.process_pending()  # bindings are invalidated here
        1
    """

    __slots__ = ("_closed", "_owner", "_tasks")

    def __init__(self, owner: threading.Thread | None = None) -> None:
        """Initialize QueueExecutionContext.

        Args:
            owner: Owning thread; defaults to the calling thread
        """
        self._owner = threading.current_thread() if owner is None else owner
        self._tasks: queue.SimpleQueue[Task] = queue.SimpleQueue()
        self._closed = False

    @property
    def pending(self) -> int:
        """Approximate number of tasks waiting to run."""
        return self._tasks.qsize()

    @property
    def closed(self) -> bool:
        return self._closed

    def is_owner(self) -> bool:
        return threading.current_thread() is self._owner

    def run(self, task: Task) -> None:
        if self._closed:
            msg = "Execution context is closed"
            raise RuntimeError(msg)
        self._tasks.put(task)

    def process_pending(self) -> int:
        """Run the queued tasks, including tasks they queue, on the owner.

        Returns:
            Number of tasks run

        Raises:
            RuntimeError: If called from a thread other than the owner
        """
        if not self.is_owner():
            msg = f"process_pending() must be called from {self._owner.name}"
            raise RuntimeError(msg)
        count = 0
        while True:
            try:
                task = self._tasks.get_nowait()
            except queue.Empty:
                return count
            task()
            count += 1

    def close(self) -> None:
        """Stop accepting tasks; later run() calls raise RuntimeError."""
        self._closed = True

    def __repr__(self) -> str:
        return f"QueueExecutionContext(owner={self._owner.name!r}, pending={self.pending})"
