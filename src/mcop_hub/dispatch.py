"""
Fire-and-forget event dispatch.

Route handlers call emit() after their primary database write commits.
The send runs as a detached asyncio task: the handler never awaits it,
and a delivery failure can never delay or fail the handler's response.

Example:
    dispatcher = get_event_dispatcher()

    # After the INSERT succeeded
    dispatcher.emit(HubEventType.OBSERVATION_CREATED, payload)

    # At shutdown
    await dispatcher.drain(timeout=10)
"""

import asyncio
import logging
import threading
from collections.abc import Coroutine, Sequence
from typing import Any

from mcop_hub.client import BatchItem, PayloadLike, SendOptions, send_batch, send_event
from mcop_hub.delivery.config import HubConfig
from mcop_hub.delivery.result import DeliveryResult
from mcop_hub.delivery.transport import HubTransport
from mcop_hub.events.models import HubEventType

logger = logging.getLogger(__name__)


class EventDispatcher:
    """
    Schedules Hub deliveries as background tasks.

    Tasks are retained until they finish so they are not garbage
    collected mid-flight. There is no cancellation of a send in flight;
    drain() only waits.
    """

    def __init__(
        self,
        config: HubConfig | None = None,
        transport: HubTransport | None = None,
    ):
        """
        Initialize dispatcher.

        Args:
            config: Hub configuration (read from the environment per send when None)
            transport: Transport shared by all sends
        """
        self.config = config
        self.transport = transport
        self._tasks: set[asyncio.Task] = set()
        self._total_dispatched = 0
        self._total_failed = 0

    @property
    def pending(self) -> int:
        """Number of sends still in flight."""
        return len(self._tasks)

    @property
    def stats(self) -> dict[str, int]:
        return {
            "pending": self.pending,
            "dispatched": self._total_dispatched,
            "failed": self._total_failed,
        }

    def emit(
        self,
        event_type: HubEventType | str,
        payload: PayloadLike,
        options: SendOptions | None = None,
    ) -> asyncio.Task:
        """
        Schedule delivery of one event without waiting for it.

        Must be called from a running event loop.

        Returns:
            The background task (callers normally ignore it)
        """
        coro = send_event(
            event_type,
            payload,
            self.config,
            options,
            transport=self.transport,
        )
        name = getattr(event_type, "value", event_type)
        return self._spawn(coro, f"hub:{name}")

    def emit_batch(
        self,
        events: Sequence[BatchItem],
        options: SendOptions | None = None,
    ) -> asyncio.Task:
        """Schedule delivery of a batch without waiting for it."""
        coro = send_batch(events, self.config, options, transport=self.transport)
        return self._spawn(coro, f"hub:batch[{len(events)}]")

    def _spawn(
        self,
        coro: Coroutine[Any, Any, DeliveryResult],
        name: str,
    ) -> asyncio.Task:
        try:
            task = asyncio.create_task(coro, name=name)
        except RuntimeError:
            # No running loop; don't leak an un-awaited coroutine
            coro.close()
            raise
        self._tasks.add(task)
        self._total_dispatched += 1
        task.add_done_callback(self._on_task_done)
        return task

    def _on_task_done(self, task: asyncio.Task) -> None:
        """Handle completion of a background send."""
        self._tasks.discard(task)

        if task.cancelled():
            logger.debug(f"[{task.get_name()}] Delivery task cancelled")
            return

        exc = task.exception()
        if exc is not None:
            self._total_failed += 1
            logger.error(
                f"[{task.get_name()}] Delivery task raised: "
                f"{type(exc).__name__}: {exc}"
            )
            return

        if not task.result().ok:
            self._total_failed += 1

    async def drain(self, timeout: float | None = None) -> int:
        """
        Wait for in-flight sends to finish.

        Args:
            timeout: Maximum seconds to wait (None waits indefinitely)

        Returns:
            Number of sends still running when the wait ended
        """
        if not self._tasks:
            return 0

        logger.info(f"Waiting for {len(self._tasks)} Hub delivery task(s)")
        _, still_pending = await asyncio.wait(set(self._tasks), timeout=timeout)
        if still_pending:
            logger.warning(
                f"{len(still_pending)} Hub delivery task(s) still running after drain"
            )
        return len(still_pending)


# =============================================================================
# GLOBAL INSTANCE
# =============================================================================

_dispatcher: EventDispatcher | None = None
_dispatcher_lock = threading.Lock()


def get_event_dispatcher(
    config: HubConfig | None = None,
    transport: HubTransport | None = None,
) -> EventDispatcher:
    """
    Get or create the global dispatcher.

    Args:
        config: Optional configuration (only used on first call)
        transport: Optional transport (only used on first call)
    """
    global _dispatcher

    if _dispatcher is None:
        with _dispatcher_lock:
            if _dispatcher is None:
                _dispatcher = EventDispatcher(config, transport)

    return _dispatcher


def reset_event_dispatcher() -> None:
    """Reset the global dispatcher (for testing)."""
    global _dispatcher
    with _dispatcher_lock:
        _dispatcher = None
