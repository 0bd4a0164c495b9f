import asyncio
import logging
from typing import Any, Awaitable, Callable, Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Superseded(Exception):
    """The fetch was replaced by a newer one before it finished."""


class LatestRequest(Generic[T]):
    """
    Keeps at most one fetch in flight for a page slot.

    Starting a fetch cancels the previous one, so when filters change
    quickly only the response to the most recent request is applied.
    A cancelled fetch raises ``Superseded`` to its awaiter instead of
    surfacing as an error.
    """

    def __init__(self, name: str = "fetch"):
        self.name = name
        self._task: asyncio.Task | None = None
        self._generation = 0

    @property
    def in_flight(self) -> bool:
        return self._task is not None and not self._task.done()

    def cancel(self) -> None:
        if self.in_flight:
            logger.debug(f"{self.name}: cancelling in-flight request")
            self._task.cancel()

    async def run(self, fetch: Callable[[], Awaitable[T]]) -> T:
        self.cancel()
        self._generation += 1
        generation = self._generation
        task = asyncio.ensure_future(fetch())
        self._task = task
        try:
            result = await asyncio.shield(task)
        except asyncio.CancelledError:
            if task.cancelled():
                raise Superseded(self.name) from None
            # the awaiting page itself went away; drop its request too
            task.cancel()
            raise
        except Exception:
            # a failure of a request nobody waits for any more is not an error
            if generation != self._generation:
                raise Superseded(self.name) from None
            raise
        if generation != self._generation:
            raise Superseded(self.name)
        return result

    async def apply(
        self, fetch: Callable[[], Awaitable[T]], on_result: Callable[[T], Any]
    ) -> bool:
        """Run ``fetch`` and hand its result to ``on_result`` unless superseded."""
        try:
            result = await self.run(fetch)
        except Superseded:
            logger.debug(f"{self.name}: discarded superseded response")
            return False
        on_result(result)
        return True


class RefreshCounter:
    """
    Monotonic counter bumped after every successful mutation.

    Lists that show mutated data remember the value they were built at and
    re-fetch when it moves; nothing is patched in place.
    """

    def __init__(self):
        self.value = 0
        self._listeners: list[Callable[[int], Any]] = []

    def subscribe(self, listener: Callable[[int], Any]) -> Callable[[], None]:
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener)

    def bump(self) -> int:
        self.value += 1
        for listener in list(self._listeners):
            listener(self.value)
        return self.value

    def is_stale(self, seen: int) -> bool:
        return seen != self.value
