"""
Key-Deduplicated Execution
==========================

Coalesces concurrent async operations that share a key: the first caller runs
the producer, every caller arriving while it is pending awaits the same outcome.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Generic, TypeVar

T = TypeVar("T")

logger = logging.getLogger(__name__)


class KeyedExecutor(Generic[T]):
    """Runs at most one producer per key at a time."""

    def __init__(self):
        self._in_flight: dict[str, asyncio.Future[T]] = {}

    def pending(self, key: str) -> bool:
        """Whether an operation is currently in flight for ``key``."""
        return key in self._in_flight

    def __len__(self) -> int:
        return len(self._in_flight)

    async def run(self, key: str, producer: Callable[[], Awaitable[T]]) -> T:
        """Run ``producer`` under ``key`` or join the operation already in flight.

        Failures are delivered to every caller attached to the key and never
        remembered: the record is dropped once the operation settles.
        """
        in_flight = self._in_flight.get(key)
        if in_flight is not None:
            logger.debug(f"Joining in-flight operation for {key}")
            # shield: a cancelled waiter must not cancel the shared operation
            return await asyncio.shield(in_flight)

        future: asyncio.Future[T] = asyncio.get_running_loop().create_future()
        self._in_flight[key] = future
        try:
            value = await producer()
        except Exception as exc:
            if not future.done():
                future.set_exception(exc)
                # Consume it so an unobserved failure does not warn on GC
                future.exception()
            raise
        except BaseException:
            # Cancellation, KeyboardInterrupt, SystemExit: joiners see CancelledError
            future.cancel()
            raise
        else:
            future.set_result(value)
            return value
        finally:
            if self._in_flight.get(key) is future:
                del self._in_flight[key]
