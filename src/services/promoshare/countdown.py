"""Remaining-time computation and the shared one-second countdown ticker."""

import asyncio
import inspect
from collections.abc import Awaitable, Callable
from contextlib import suppress
from datetime import datetime, timedelta, timezone

from src.core.config import app_config
from src.core.logger import get_logger
from src.services.promoshare.models import Draw, Remaining

logger = get_logger(__name__)

MS_PER_SECOND = 1000
MS_PER_MINUTE = 60 * MS_PER_SECOND
MS_PER_HOUR = 60 * MS_PER_MINUTE
MS_PER_DAY = 24 * MS_PER_HOUR

TickCallback = Callable[[dict[str | int, Remaining]], Awaitable[None] | None]
Sleep = Callable[[float], Awaitable[None]]


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _aware(value: datetime) -> datetime:
    return value if value.tzinfo is not None else value.replace(tzinfo=timezone.utc)


def remaining(end_at: datetime, now: datetime) -> Remaining:
    """
    Split the time left until `end_at` into days/hours/minutes/seconds.

    A past or current `end_at` yields all zeros: the draw is awaiting settlement.
    """
    diff_ms = int((_aware(end_at) - _aware(now)) / timedelta(milliseconds=1))
    if diff_ms <= 0:
        return Remaining()

    days, rest = divmod(diff_ms, MS_PER_DAY)
    hours, rest = divmod(rest, MS_PER_HOUR)
    minutes, rest = divmod(rest, MS_PER_MINUTE)
    return Remaining(days=days, hours=hours, minutes=minutes, seconds=rest // MS_PER_SECOND)


def format_compact(left: Remaining) -> str:
    """Two most significant units, e.g. "4d 3h", "5h 20m" or "12m". Display only."""
    if left.days > 0:
        return f'{left.days}d {left.hours}h'
    if left.hours > 0:
        return f'{left.hours}h {left.minutes}m'
    return f'{left.minutes}m'


class CountdownTicker:
    """
    One repeating timer that recomputes the remaining time of every tracked draw.

    Use it as an async context manager, or pair `start()` with `stop()` /
    `aclose()`. Once stopped, `on_tick` is never called again.
    """

    def __init__(
        self,
        on_tick: TickCallback,
        interval: float | None = None,
        clock: Callable[[], datetime] = utcnow,
        sleep: Sleep = asyncio.sleep,
    ):
        """
        Initialize ticker.

        Args:
            on_tick: Called every tick with {draw_id: Remaining}; may be a coroutine function
            interval: Seconds between ticks, defaults to COUNTDOWN_TICK_SECONDS
            clock: Source of the current time
            sleep: Waits between ticks, defaults to asyncio.sleep
        """
        self.on_tick = on_tick
        self.interval = app_config.COUNTDOWN_TICK_SECONDS if interval is None else interval
        self.clock = clock
        self._sleep = sleep
        self._draws: list[Draw] = []
        self._task: asyncio.Task | None = None
        self._stopped = False

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    @property
    def draws(self) -> list[Draw]:
        return list(self._draws)

    def tick(self) -> dict[str | int, Remaining]:
        """Compute remaining time for all tracked draws at the current clock reading."""
        now = self.clock()
        return {draw.id: remaining(draw.end_at, now) for draw in self._draws}

    def update(self, draws: list[Draw]):
        """
        Replace the tracked draws. An empty list releases the timer.

        Args:
            draws: New draw list, swapped in whole
        """
        self._draws = list(draws)
        if not self._draws and self.running:
            logger.debug('No draws left to count down, stopping ticker')
            self.stop()

    def start(self):
        """Start ticking. No-op when already running or when there is nothing to track."""
        if self.running:
            return
        if not self._draws:
            logger.debug('Ticker not started: no draws')
            return
        self._stopped = False
        self._task = asyncio.create_task(self._run())

    def stop(self):
        """Cancel the timer. Safe to call any number of times."""
        self._stopped = True
        if self._task is not None and not self._task.done():
            self._task.cancel()

    async def aclose(self):
        """Stop and wait until the timer task has finished."""
        self.stop()
        task, self._task = self._task, None
        if task is not None:
            with suppress(asyncio.CancelledError):
                await task

    async def _emit(self):
        result = self.on_tick(self.tick())
        if inspect.isawaitable(result):
            await result

    async def _run(self):
        try:
            while self._draws and not self._stopped:
                await self._emit()
                await self._sleep(self.interval)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.error(f'Countdown tick failed, stopping ticker: {e}', exc_info=True)
        finally:
            self._stopped = True
            logger.debug('Countdown ticker stopped')

    async def __aenter__(self):
        self.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()
