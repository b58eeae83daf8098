"""Share one in-flight coroutine among concurrent callers of the same key."""

from __future__ import annotations

import asyncio
import typing as typ

if typ.TYPE_CHECKING:
    import collections.abc as cabc

T = typ.TypeVar("T")


class SingleFlight(typ.Generic[T]):
    """Run at most one task per key; later callers await the same task.

    The task is shielded so a cancelled waiter does not cancel the work the
    other waiters depend on. The slot is released when the task finishes,
    whether it succeeded or raised, and every waiter sees the same result
    or exception.
    """

    def __init__(self) -> None:
        """Create an empty registry of in-flight tasks."""
        self._tasks: dict[str, asyncio.Task[T]] = {}

    def in_flight(self, key: str) -> bool:
        """Return whether a task is currently running for ``key``."""
        return key in self._tasks

    async def run(
        self,
        key: str,
        factory: cabc.Callable[[], cabc.Coroutine[typ.Any, typ.Any, T]],
    ) -> T:
        """Await the task for ``key``, starting it from ``factory`` if idle."""
        task = self._tasks.get(key)
        if task is None:
            task = asyncio.ensure_future(factory())
            self._tasks[key] = task
            task.add_done_callback(lambda done: self._release(key, done))
        return await asyncio.shield(task)

    def _release(self, key: str, task: asyncio.Task[T]) -> None:
        if self._tasks.get(key) is task:
            del self._tasks[key]
        # Waiters cancelled before the task finished never read its outcome.
        if not task.cancelled():
            task.exception()
