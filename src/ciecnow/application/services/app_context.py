"""Application context - the single owner of session and period state."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field

from ciecnow.application.services.period_selector import PeriodSelector
from ciecnow.application.services.session_coordinator import SessionCoordinator


@dataclass
class AppContext:
    """Explicit context handed to handlers instead of ambient globals.

    start() runs the openers, then loads the session; close() tears the session
    down, then runs the closers in order.
    """

    session: SessionCoordinator
    period: PeriodSelector
    openers: list[Callable[[], Awaitable[None]]] = field(default_factory=list)
    closers: list[Callable[[], Awaitable[None]]] = field(default_factory=list)

    async def start(self) -> None:
        for opener in self.openers:
            await opener()
        await self.session.start()

    async def close(self) -> None:
        await self.session.close()
        for closer in self.closers:
            await closer()
