"""Query input coordinator: debounces free typing into settled queries.

Idle -> (text changed) -> Debouncing -> (window elapses) -> Settled -> Idle.
A change while Debouncing restarts the window, so a burst of keystrokes
produces one emission carrying the last text.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Awaitable, Callable

from unified_search.core.config import get_settings

logger = logging.getLogger(__name__)

SettledListener = Callable[[str], Awaitable[None] | None]


class QueryInputCoordinator:
    """Owns the current input text and the debounce timer.

    Must be driven from a running event loop. Async listeners are scheduled
    as tasks; the coordinator keeps references until they finish.
    """

    def __init__(self, debounce_seconds: float | None = None) -> None:
        if debounce_seconds is None:
            debounce_seconds = get_settings().debounce_seconds
        if debounce_seconds < 0:
            raise ValueError("debounce_seconds must be >= 0")
        self._debounce_seconds = debounce_seconds
        self._text = ""
        self._timer: asyncio.TimerHandle | None = None
        self._listeners: list[SettledListener] = []
        self._tasks: set[asyncio.Task] = set()

    @property
    def text(self) -> str:
        return self._text

    @property
    def is_debouncing(self) -> bool:
        return self._timer is not None

    @property
    def debounce_seconds(self) -> float:
        return self._debounce_seconds

    def subscribe(self, listener: SettledListener) -> Callable[[], None]:
        """Register a settled-query listener. Returns a function that unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def on_text_changed(self, text: str) -> None:
        """Record new text and (re)start the debounce window."""
        self._text = text
        self._cancel_timer()
        loop = asyncio.get_running_loop()
        self._timer = loop.call_later(self._debounce_seconds, self._settle)

    def set_text(self, text: str) -> None:
        """Replace the text without starting a debounce (programmatic updates)."""
        self._cancel_timer()
        self._text = text

    def cancel_pending(self) -> bool:
        """Drop a pending debounce without emitting. Returns True if one was pending."""
        pending = self._timer is not None
        self._cancel_timer()
        return pending

    def flush(self) -> None:
        """Settle immediately if a debounce is pending."""
        if self._timer is not None:
            self._cancel_timer()
            self._settle()

    async def drain(self) -> None:
        """Wait for async listeners scheduled by earlier settles."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)
            self._tasks = {task for task in self._tasks if not task.done()}

    def close(self) -> None:
        """Cancel the timer and any listener tasks still running."""
        self._cancel_timer()
        for task in list(self._tasks):
            task.cancel()
        self._listeners.clear()

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _settle(self) -> None:
        self._timer = None
        text = self._text
        logger.debug("Query settled: %r", text)
        for listener in list(self._listeners):
            result = listener(text)
            if inspect.isawaitable(result):
                task = asyncio.ensure_future(result)
                self._tasks.add(task)
                task.add_done_callback(self._on_listener_done)

    def _on_listener_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if not task.cancelled() and task.exception() is not None:
            logger.error("Settled-query listener failed", exc_info=task.exception())
