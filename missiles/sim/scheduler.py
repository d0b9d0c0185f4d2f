from __future__ import annotations

import itertools
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

logger = logging.getLogger("missiles")

TaskCallback = Callable[["ScheduledTask"], None]


@dataclass
class ScheduledTask:
    """A one-shot (`period is None`) or repeating task on the host tick clock."""

    task_id: int
    owner: Any
    callback: TaskCallback
    delay: int
    period: int | None
    next_run: int

    runs: int = 0
    cancelled: bool = False

    @property
    def repeating(self) -> bool:
        return self.period is not None

    def cancel(self) -> None:
        self.cancelled = True


@dataclass
class TickScheduler:
    """Cooperative per-tick scheduler.

    Tasks created while a heartbeat is running are queued and only become
    eligible on a later heartbeat, so a delay of 0 means "next tick".
    A task whose callback raises is logged and cancelled; the heartbeat
    carries on with the remaining tasks.
    """

    current_tick: int = 0
    _tasks: list[ScheduledTask] = field(default_factory=list)
    _pending: list[ScheduledTask] = field(default_factory=list)
    _ids: itertools.count = field(default_factory=lambda: itertools.count(1))

    def run_task_later(self, owner: Any, callback: TaskCallback, delay: int) -> ScheduledTask:
        return self._schedule(owner, callback, delay, None)

    def run_task_timer(self, owner: Any, callback: TaskCallback, delay: int, period: int) -> ScheduledTask:
        if period < 1:
            raise ValueError(f"period must be at least 1 tick, got {period}")
        return self._schedule(owner, callback, delay, period)

    def _schedule(self, owner: Any, callback: TaskCallback, delay: int, period: int | None) -> ScheduledTask:
        delay = max(int(delay), 0)
        task = ScheduledTask(
            task_id=next(self._ids),
            owner=owner,
            callback=callback,
            delay=delay,
            period=period,
            next_run=self.current_tick + delay,
        )
        self._pending.append(task)
        return task

    def cancel_tasks(self, owner: Any) -> int:
        """Cancel every live task belonging to `owner`. Returns how many were cancelled."""
        cancelled = 0
        for task in itertools.chain(self._tasks, self._pending):
            if task.owner is owner and not task.cancelled:
                task.cancel()
                cancelled += 1
        return cancelled

    def tasks(self, owner: Any | None = None) -> list[ScheduledTask]:
        """Live tasks, optionally filtered by owner."""
        live = [t for t in itertools.chain(self._tasks, self._pending) if not t.cancelled]
        if owner is None:
            return live
        return [t for t in live if t.owner is owner]

    def heartbeat(self) -> int:
        """Advance one tick and run every due task. Returns the number of callbacks run."""
        self.current_tick += 1
        self._tasks.extend(self._pending)
        self._pending.clear()

        due = [t for t in self._tasks if not t.cancelled and t.next_run <= self.current_tick]
        due.sort(key=lambda t: (t.next_run, t.task_id))

        ran = 0
        for task in due:
            if task.cancelled:
                continue
            try:
                task.callback(task)
            except Exception:
                logger.exception(f"Task #{task.task_id} owned by {task.owner!r} raised; cancelling it")
                task.cancel()
            task.runs += 1
            ran += 1
            if task.period is None:
                task.cancel()
            elif not task.cancelled:
                task.next_run = self.current_tick + task.period

        self._tasks = [t for t in self._tasks if not t.cancelled]
        return ran
