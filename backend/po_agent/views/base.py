from __future__ import annotations

import asyncio
import contextlib
import enum
import logging
from collections.abc import Awaitable, Callable, Sequence
from typing import Generic, TypeVar

from po_agent.client import AgentError, PoAgentClient

logger = logging.getLogger(__name__)

T = TypeVar("T")

Notify = Callable[[str], None]


class ViewState(str, enum.Enum):
    IDLE = "idle"
    IN_FLIGHT = "in_flight"


def log_notification(message: str) -> None:
    logger.warning("%s", message)


class StatusTicker:
    """Cycles display-only status messages while a request is in flight.

    The ticker is decoupled from the request: stopping it never cancels the call.
    """

    def __init__(
        self,
        messages: Sequence[str],
        interval: float = 2.0,
        on_tick: Callable[[str], None] | None = None,
    ) -> None:
        self.messages = tuple(messages)
        self.interval = interval
        self.on_tick = on_tick
        self.current: str | None = None
        self._task: asyncio.Task | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if not self.messages or self.running:
            return
        self._task = asyncio.get_running_loop().create_task(self._run())

    async def _run(self) -> None:
        i = 0
        while True:
            self.current = self.messages[i % len(self.messages)]
            if self.on_tick is not None:
                self.on_tick(self.current)
            i += 1
            await asyncio.sleep(self.interval)

    async def stop(self) -> None:
        task, self._task = self._task, None
        if task is not None:
            task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await task
        self.current = None


class RequestView(Generic[T]):
    """Local state of one page: idle -> in flight -> (success | failure) -> idle."""

    status_messages: tuple[str, ...] = ()

    def __init__(
        self,
        client: PoAgentClient,
        notify: Notify | None = None,
        status_interval: float = 2.0,
    ) -> None:
        self.client = client
        self.notify = notify or log_notification
        self.state = ViewState.IDLE
        self.result: T | None = None
        self.ticker = StatusTicker(self.status_messages, interval=status_interval)

    @property
    def in_flight(self) -> bool:
        return self.state is ViewState.IN_FLIGHT

    @property
    def can_submit(self) -> bool:
        return not self.in_flight and self.has_input()

    def has_input(self) -> bool:
        raise NotImplementedError

    def clear_result(self) -> None:
        self.result = None

    def apply_result(self, result: T) -> None:
        self.result = result

    async def submit(self, call: Callable[[], Awaitable[T]]) -> T | None:
        """Run ``call`` once. Failures are reported through ``notify``, not raised."""
        if not self.can_submit:
            return None

        self.state = ViewState.IN_FLIGHT
        self.clear_result()
        self.ticker.start()
        try:
            result = await call()
        except AgentError as exc:
            self.notify(exc.message)
            return None
        finally:
            await self.ticker.stop()
            self.state = ViewState.IDLE

        self.apply_result(result)
        return result
