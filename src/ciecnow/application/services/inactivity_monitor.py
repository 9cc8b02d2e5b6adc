"""Inactivity monitor - single asyncio timer restarted on user activity."""

import asyncio
import inspect
import logging
from collections.abc import Awaitable, Callable

logger = logging.getLogger(__name__)

DEFAULT_INACTIVITY_TIMEOUT = 5 * 60.0


class InactivityMonitor:
    """Fires on_timeout once after timeout_seconds without a reset.

    At most one timer is pending: arm() and reset() cancel the previous one.
    """

    def __init__(
        self,
        timeout_seconds: float,
        on_timeout: Callable[[], Awaitable[None] | None],
    ) -> None:
        if timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be positive")
        self._timeout = timeout_seconds
        self._on_timeout = on_timeout
        self._handle: asyncio.TimerHandle | None = None
        self._tasks: set[asyncio.Task] = set()

    @property
    def timeout(self) -> float:
        return self._timeout

    @property
    def armed(self) -> bool:
        return self._handle is not None

    def arm(self) -> None:
        """Start (or restart) the countdown. Must be called from the event loop."""
        self.disarm()
        loop = asyncio.get_running_loop()
        self._handle = loop.call_later(self._timeout, self._fire)

    def reset(self) -> None:
        self.arm()

    def disarm(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def cancel_pending(self) -> None:
        """Disarm and cancel a timeout callback that is still running."""
        self.disarm()
        for task in list(self._tasks):
            task.cancel()

    def _fire(self) -> None:
        self._handle = None
        logger.debug("Inactivity timeout of %.0fs elapsed", self._timeout)
        result = self._on_timeout()
        if inspect.isawaitable(result):
            task = asyncio.ensure_future(result)
            self._tasks.add(task)
            task.add_done_callback(self._tasks.discard)
