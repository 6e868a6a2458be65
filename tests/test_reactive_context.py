"""Tests for execution contexts and run_on_owner().

Python 3.13+.
"""

from __future__ import annotations

import asyncio
import threading

import pytest

from localize.reactive import (
    AsyncioExecutionContext,
    ExecutionContext,
    QueueExecutionContext,
    run_on_owner,
)


def _in_thread(target) -> None:
    thread = threading.Thread(target=target)
    thread.start()
    thread.join()


class TestRunOnOwner:
    """Inline, queued and fallback execution."""

    def test_no_context_runs_inline(self) -> None:
        calls: list[str] = []
        run_on_owner(None, lambda: calls.append("ran"))
        assert calls == ["ran"]

    def test_owner_runs_inline(self) -> None:
        context = QueueExecutionContext()
        calls: list[str] = []
        run_on_owner(context, lambda: calls.append("ran"))
        assert calls == ["ran"]
        assert context.pending == 0

    def test_other_thread_is_queued(self) -> None:
        context = QueueExecutionContext()
        calls: list[str] = []
        _in_thread(lambda: run_on_owner(context, lambda: calls.append(threading.current_thread().name)))
        assert calls == []
        assert context.process_pending() == 1
        assert calls == [threading.current_thread().name]

    def test_closed_context_runs_inline(self) -> None:
        context = QueueExecutionContext()
        context.close()
        calls: list[str] = []
        _in_thread(lambda: run_on_owner(context, lambda: calls.append("ran")))
        assert calls == ["ran"]
        assert context.pending == 0


class TestQueueExecutionContext:
    """Owner checks and queue draining."""

    def test_is_execution_context(self) -> None:
        assert isinstance(QueueExecutionContext(), ExecutionContext)

    def test_is_owner(self) -> None:
        context = QueueExecutionContext()
        results: list[bool] = []
        _in_thread(lambda: results.append(context.is_owner()))
        assert context.is_owner()
        assert results == [False]

    def test_explicit_owner(self) -> None:
        worker = threading.Thread(target=lambda: None)
        context = QueueExecutionContext(worker)
        assert not context.is_owner()

    def test_process_pending_requires_owner(self) -> None:
        context = QueueExecutionContext()
        errors: list[Exception] = []

        def drain() -> None:
            try:
                context.process_pending()
            except RuntimeError as e:
                errors.append(e)

        _in_thread(drain)
        assert len(errors) == 1

    def test_process_pending_runs_tasks_queued_by_tasks(self) -> None:
        context = QueueExecutionContext()
        calls: list[str] = []
        context.run(lambda: context.run(lambda: calls.append("second")))
        assert context.process_pending() == 2
        assert calls == ["second"]

    def test_closed_run_raises(self) -> None:
        context = QueueExecutionContext()
        context.close()
        assert context.closed
        with pytest.raises(RuntimeError):
            context.run(lambda: None)


class TestAsyncioExecutionContext:
    """Event-loop owned notifications."""

    def test_none_loop_rejected(self) -> None:
        with pytest.raises(TypeError):
            AsyncioExecutionContext(None)  # type: ignore[arg-type]

    def test_from_running_loop_requires_loop(self) -> None:
        with pytest.raises(RuntimeError):
            AsyncioExecutionContext.from_running_loop()

    def test_not_owner_outside_loop(self) -> None:
        loop = asyncio.new_event_loop()
        try:
            assert not AsyncioExecutionContext(loop).is_owner()
        finally:
            loop.close()

    def test_task_from_thread_runs_on_loop(self) -> None:
        calls: list[bool] = []

        async def main() -> None:
            context = AsyncioExecutionContext.from_running_loop()
            assert context.is_owner()
            done = asyncio.Event()

            def task() -> None:
                calls.append(context.is_owner())
                done.set()

            await asyncio.to_thread(run_on_owner, context, task)
            await asyncio.wait_for(done.wait(), timeout=5)

        asyncio.run(main())
        assert calls == [True]

    def test_closed_loop_runs_inline(self) -> None:
        loop = asyncio.new_event_loop()
        loop.close()
        calls: list[str] = []
        run_on_owner(AsyncioExecutionContext(loop), lambda: calls.append("ran"))
        assert calls == ["ran"]
