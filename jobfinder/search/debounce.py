"""Collapse bursts of edits into one delayed call on the running event loop."""
from __future__ import annotations

import asyncio
from typing import Callable


class Debouncer:
    """Runs *callback* once the edits have been quiet for *delay* seconds.

    Every :meth:`trigger` bumps ``generation`` and reschedules.  A timer only
    fires the callback if its generation is still the current one.
    """

    def __init__(self, delay: float, callback: Callable[[], None]) -> None:
        self.delay = delay
        self.callback = callback
        self.generation = 0
        self._handle: asyncio.TimerHandle | None = None

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def trigger(self) -> int:
        """Schedule the callback on the running loop.

        Called outside an event loop there is nothing to schedule on, so the
        callback runs immediately instead.
        """
        self.generation += 1
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            self.callback()
            return self.generation
        self._handle = loop.call_later(self.delay, self._fire, self.generation)
        return self.generation

    def _fire(self, generation: int) -> None:
        if generation != self.generation:
            return
        self._handle = None
        self.callback()

    def cancel(self) -> None:
        self.generation += 1
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def flush(self) -> None:
        """Run the callback now if a call is pending."""
        if self._handle is None:
            return
        self.cancel()
        self.callback()
