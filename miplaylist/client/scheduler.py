import asyncio
import logging

logger = logging.getLogger(__name__)

class Scheduler:
    """Fire-once deferred callbacks on the running event loop.

    Every call returns a handle that can be cancelled; ``cancel_all`` drops
    whatever is still pending, e.g. when the view is torn down.
    """

    def __init__(self):
        self._handles = set()

    def call_later(self, delay: float, callback, *args) -> asyncio.TimerHandle:
        loop = asyncio.get_running_loop()
        handle = None

        def fire():
            self._handles.discard(handle)
            callback(*args)

        handle = loop.call_later(delay, fire)
        self._handles.add(handle)
        return handle

    def cancel_all(self):
        if self._handles:
            logger.debug(f"Cancelling {len(self._handles)} pending timers")
        for handle in self._handles:
            handle.cancel()
        self._handles.clear()

    @property
    def pending(self) -> int:
        return len(self._handles)
