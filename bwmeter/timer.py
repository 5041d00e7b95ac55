"""One-shot and periodic timers driven by an explicit clock."""

from __future__ import annotations

import bisect
import itertools
import time
from dataclasses import dataclass, field
from typing import Any, Callable

TimerCallback = Callable[[Any, int], None]


def now_usecs() -> int:
    """Current monotonic time in microseconds."""
    return time.monotonic_ns() // 1000


@dataclass(eq=False)
class Timer:
    """A scheduled callback; ``due`` is the expiry time in microseconds."""

    callback: TimerCallback
    client_data: Any
    usecs: int
    periodic: bool
    due: int
    _seq: int = field(default=0, repr=False)


class TimerQueue:
    """Timers kept in expiry order; timers due at the same time run in the
    order they were scheduled."""

    def __init__(self, clock: Callable[[], int] | None = None) -> None:
        self._clock = clock if clock is not None else now_usecs
        self._entries: list[tuple[int, int, Timer]] = []
        self._counter = itertools.count()

    def _now(self, now: int | None) -> int:
        return self._clock() if now is None else now

    def _add(self, timer: Timer) -> None:
        timer._seq = next(self._counter)
        bisect.insort(self._entries, (timer.due, timer._seq, timer))

    def _remove(self, timer: Timer) -> bool:
        key = (timer.due, timer._seq)
        index = bisect.bisect_left(self._entries, key, key=None) if False else None
        for index, (due, seq, entry) in enumerate(self._entries):
            if entry is timer:
                del self._entries[index]
                return True
        return False

    def create(
        self,
        callback: TimerCallback,
        client_data: Any = None,
        usecs: int = 0,
        periodic: bool = False,
        now: int | None = None,
    ) -> Timer:
        """Schedule *callback* to fire *usecs* microseconds from *now*."""
        start = self._now(now)
        timer = Timer(callback, client_data, int(usecs), bool(periodic), start + int(usecs))
        self._add(timer)
        return timer

    def timeout(self, now: int | None = None) -> float | None:
        """Seconds until the next timer fires, 0.0 if overdue, None if idle."""
        if not self._entries:
            return None
        current = self._now(now)
        remaining = self._entries[0][0] - current
        if remaining <= 0:
            return 0.0
        return remaining / 1_000_000

    def run(self, now: int | None = None) -> None:
        """Fire every timer that is due at *now*."""
        current = self._now(now)
        while self._entries and self._entries[0][0] <= current:
            _, _, timer = self._entries.pop(0)
            timer.callback(timer.client_data, current)
            if timer.periodic:
                timer.due += timer.usecs
                self._add(timer)

    def reset(self, timer: Timer, now: int | None = None) -> None:
        """Reschedule *timer* to its interval from *now*."""
        self._remove(timer)
        timer.due = self._now(now) + timer.usecs
        self._add(timer)

    def cancel(self, timer: Timer) -> None:
        """Deschedule *timer*; cancelling an idle timer does nothing."""
        self._remove(timer)

    def destroy(self) -> None:
        """Cancel all timers."""
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, timer: object) -> bool:
        return any(entry is timer for _, _, entry in self._entries)