"""Callback-or-future calling convention shared by driver operations."""

from __future__ import annotations

import asyncio
import functools
from typing import Any, Awaitable, Callable

from .errors import InvalidRequest

Callback = Callable[..., Any]

# Work started on the caller's behalf. Held here so it runs to completion
# even when nobody keeps a reference to it.
_running: set[asyncio.Task] = set()


def check_callback(callback: Any) -> None:
    """Raise ``InvalidRequest`` unless callback is None or callable."""
    if callback is not None and not callable(callback):
        raise InvalidRequest(
            f"callback must be callable, not {type(callback).__name__}"
        )


def detach(task: asyncio.Task) -> asyncio.Task:
    """Keep ``task`` alive until it finishes and consume its outcome."""
    _running.add(task)
    task.add_done_callback(_finished)
    return task


def _finished(task: asyncio.Task) -> None:
    _running.discard(task)
    if not task.cancelled():
        task.exception()


def complete(
    callback: Callback | None,
    fn: Callable[..., Awaitable[Any]],
    *args: Any,
    **kwargs: Any,
) -> asyncio.Future:
    """Run ``fn(*args, **kwargs)`` once and deliver its outcome.

    The coroutine runs as a single detached task. The returned future
    settles when that task does; awaiting it yields the result or raises
    the error. Cancelling the future only stops the caller from waiting:
    the work itself always runs to completion.

    If ``callback`` is given it is called exactly once when the same task
    finishes, node-style:

    - ``callback(error)`` on failure,
    - ``callback(None, *result)`` when the result is a tuple
      (e.g. ``GetResult`` -> ``(None, hits, misses)``),
    - ``callback(None, result)`` otherwise.

    Invalid callbacks raise ``InvalidRequest`` before ``fn`` is called.
    Outside a running event loop this raises ``RuntimeError``.
    """
    check_callback(callback)
    loop = asyncio.get_running_loop()
    task = detach(loop.create_task(fn(*args, **kwargs)))
    future = loop.create_future()
    task.add_done_callback(functools.partial(_settle, future))
    if callback is not None:
        task.add_done_callback(functools.partial(_deliver, callback))
        # Callback callers usually drop the future; its error was delivered.
        future.add_done_callback(_consume)
    return future


def _settle(future: asyncio.Future, task: asyncio.Task) -> None:
    if future.done():
        return
    if task.cancelled():
        future.cancel()
        return
    error = task.exception()
    if error is not None:
        future.set_exception(error)
    else:
        future.set_result(task.result())


def _consume(future: asyncio.Future) -> None:
    if not future.cancelled():
        future.exception()


def _deliver(callback: Callback, task: asyncio.Task) -> None:
    if task.cancelled():
        callback(asyncio.CancelledError())
        return
    error = task.exception()
    if error is not None:
        callback(error)
        return
    result = task.result()
    if isinstance(result, tuple):
        callback(None, *result)
    else:
        callback(None, result)
