import asyncio
from typing import Any, Callable, Optional

from http_handler.core import settings


class LoopScheduler:
    """Delivers completions on an event loop through `call_soon_threadsafe`.

    Without an explicit loop, each delivery goes to the loop that is running
    the dispatch, so one handler can be reused across `asyncio.run` calls.
    An explicit loop that has since been closed falls back to the running
    loop. Delivery is never synchronous with the caller.
    """

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._loop = loop

    @property
    def loop(self) -> Optional[asyncio.AbstractEventLoop]:
        return self._loop

    def deliver(self, callback: Callable[..., Any], *args: Any) -> None:
        loop = self._loop
        if loop is None or loop.is_closed():
            if loop is not None:
                settings.logger.warning(
                    "Completion loop is closed, delivering on the running loop instead"
                )
            loop = asyncio.get_running_loop()
        loop.call_soon_threadsafe(callback, *args)


class InlineScheduler:
    """Runs completions immediately on the dispatching task. Meant for tests."""

    def deliver(self, callback: Callable[..., Any], *args: Any) -> None:
        callback(*args)
