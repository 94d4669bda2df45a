from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, replace
from enum import Enum
import inspect
import logging

from yieldsync.domain.entities.snapshot import RefreshClock


logger = logging.getLogger(__name__)


class Cadence(str, Enum):
    FAST = "fast"
    SLOW = "slow"
    CHAIN_HEAD = "chain_head"


class TaskState(str, Enum):
    IDLE = "idle"
    SCHEDULED = "scheduled"
    FIRING = "firing"


RefreshAction = Callable[..., Awaitable[None] | None]


class ScheduledTask:
    """Cancelable interval timer on the running event loop.

    Ticks are wall-clock driven: ``on_tick`` must return without waiting for the
    work it dispatches.
    """

    def __init__(self, name: str, interval_seconds: float, on_tick: Callable[[], None]):
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive.")
        self.name = name
        self.interval_seconds = interval_seconds
        self._on_tick = on_tick
        self._task: asyncio.Task | None = None
        self.state = TaskState.IDLE

    @property
    def active(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> ScheduledTask:
        if self.active:
            return self
        loop = asyncio.get_running_loop()
        self._task = loop.create_task(self._run(), name=f"refresh:{self.name}")
        self.state = TaskState.SCHEDULED
        return self

    def cancel(self) -> None:
        if self._task is not None:
            self._task.cancel()
            self._task = None
        self.state = TaskState.IDLE

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self.interval_seconds)
            self.state = TaskState.FIRING
            try:
                self._on_tick()
            except Exception:
                logger.exception("scheduler: tick_failed cadence=%s", self.name)
            finally:
                self.state = TaskState.SCHEDULED


@dataclass
class _Registration:
    action: RefreshAction
    require_new_block: bool = False
    last_block: int | None = None


class RefreshScheduler:
    """Drives the fast, slow and chain-head cadences.

    The fast cadence only runs while a wallet account is connected and its
    actions receive that account. Dispatched coroutines are not awaited; their
    failures are logged and never stop the next tick.
    """

    def __init__(
        self,
        *,
        fast_interval_seconds: float,
        slow_interval_seconds: float,
        chain_head_interval_seconds: float,
        block_source: Callable[[], int] | None = None,
    ):
        self._intervals = {
            Cadence.FAST: fast_interval_seconds,
            Cadence.SLOW: slow_interval_seconds,
            Cadence.CHAIN_HEAD: chain_head_interval_seconds,
        }
        self._block_source = block_source
        self._registrations: dict[Cadence, list[_Registration]] = {cadence: [] for cadence in Cadence}
        self._tasks: dict[Cadence, ScheduledTask] = {}
        self._in_flight: set[asyncio.Future] = set()
        self._clock = RefreshClock()
        self._account: str | None = None
        self._running = False

    @property
    def clock(self) -> RefreshClock:
        return self._clock

    @property
    def account(self) -> str | None:
        return self._account

    @property
    def running(self) -> bool:
        return self._running

    @property
    def in_flight(self) -> int:
        return len(self._in_flight)

    def task_state(self, cadence: Cadence) -> TaskState:
        task = self._tasks.get(cadence)
        return task.state if task is not None else TaskState.IDLE

    def register_fast_refresh(self, action: RefreshAction, *, require_new_block: bool = False) -> Callable[[], None]:
        return self._register(Cadence.FAST, action, require_new_block)

    def register_slow_refresh(self, action: RefreshAction, *, require_new_block: bool = False) -> Callable[[], None]:
        return self._register(Cadence.SLOW, action, require_new_block)

    def register_chain_head_refresh(self, action: RefreshAction) -> Callable[[], None]:
        return self._register(Cadence.CHAIN_HEAD, action, False)

    def _register(self, cadence: Cadence, action: RefreshAction, require_new_block: bool) -> Callable[[], None]:
        registration = _Registration(action=action, require_new_block=require_new_block)
        self._registrations[cadence].append(registration)

        def unregister() -> None:
            if registration in self._registrations[cadence]:
                self._registrations[cadence].remove(registration)

        return unregister

    def start(self) -> None:
        if self._running:
            return
        self._running = True
        self._arm(Cadence.SLOW)
        self._arm(Cadence.CHAIN_HEAD)
        self._dispatch(Cadence.SLOW)
        if self._account is not None:
            self._arm(Cadence.FAST)
            self._dispatch(Cadence.FAST)
        logger.info("scheduler: started intervals=%s", {c.value: s for c, s in self._intervals.items()})

    def stop(self) -> None:
        for task in self._tasks.values():
            task.cancel()
        self._tasks.clear()
        if self._running:
            logger.info("scheduler: stopped in_flight=%s", len(self._in_flight))
        self._running = False

    def set_account(self, account: str | None) -> None:
        previous = self._account
        self._account = account
        if account is None:
            task = self._tasks.pop(Cadence.FAST, None)
            if task is not None:
                task.cancel()
                logger.info("scheduler: fast_cadence_paused reason=disconnected")
            return
        if not self._running:
            return
        self._arm(Cadence.FAST)
        if account != previous:
            self._dispatch(Cadence.FAST)

    def _arm(self, cadence: Cadence) -> None:
        task = self._tasks.get(cadence)
        if task is None:
            task = ScheduledTask(cadence.value, self._intervals[cadence], lambda: self._tick(cadence))
            self._tasks[cadence] = task
        task.start()

    def _tick(self, cadence: Cadence) -> None:
        if cadence is Cadence.FAST:
            self._clock = replace(self._clock, fast=self._clock.fast + 1)
        elif cadence is Cadence.SLOW:
            self._clock = replace(self._clock, slow=self._clock.slow + 1)
        else:
            self._clock = replace(self._clock, chain_head=self._clock.chain_head + 1)
        self._dispatch(cadence)

    def _dispatch(self, cadence: Cadence) -> None:
        if cadence is Cadence.FAST and self._account is None:
            return
        args = (self._account,) if cadence is Cadence.FAST else ()
        block = self._block_source() if self._block_source is not None else None
        for registration in list(self._registrations[cadence]):
            if registration.require_new_block:
                if block is None or block == registration.last_block:
                    continue
                registration.last_block = block
            try:
                result = registration.action(*args)
            except Exception:
                logger.exception("scheduler: action_failed cadence=%s", cadence.value)
                continue
            if inspect.isawaitable(result):
                future = asyncio.ensure_future(result)
                self._in_flight.add(future)
                future.add_done_callback(self._on_action_done)

    def _on_action_done(self, future: asyncio.Future) -> None:
        self._in_flight.discard(future)
        if future.cancelled():
            return
        exc = future.exception()
        if exc is not None:
            logger.warning("scheduler: action_error error=%r", exc)
