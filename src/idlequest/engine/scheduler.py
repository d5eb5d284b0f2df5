"""Fixed-interval polled tasks.

Nothing runs on its own: the owner calls run_pending(now) from its tick
and every due task runs once. Tasks belong to the context that scheduled
them and are cancelled when that context ends.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

from idlequest.core.exceptions import ValidationError
from idlequest.core.logging import get_logger


logger = get_logger(__name__)

TaskCallback = Callable[[float], None]


@dataclass
class PeriodicTask:
    """A recurring callback.

    Attributes:
        name: Unique task name.
        interval: Seconds between runs.
        callback: Called with the seconds elapsed since the previous run.
        next_run: Clock time of the next run.
        last_run: Clock time of the previous run, or of scheduling.
        runs: Number of completed runs.
        cancelled: Whether the task was cancelled.
    """

    name: str
    interval: float
    callback: TaskCallback = field(repr=False)
    next_run: float
    last_run: float
    runs: int = 0
    cancelled: bool = False

    def is_due(self, now: float) -> bool:
        """Check whether the task should run at ``now``."""
        return not self.cancelled and now >= self.next_run

    def run(self, now: float) -> None:
        """Run the callback and schedule the next run.

        A task that fell behind by more than one interval runs once and
        is rescheduled relative to ``now``.
        """
        elapsed = now - self.last_run
        self.last_run = now
        self.next_run += self.interval
        if self.next_run <= now:
            self.next_run = now + self.interval
        self.runs += 1
        self.callback(elapsed)


class TaskScheduler:
    """Owns periodic tasks and runs the due ones on demand."""

    def __init__(self) -> None:
        self._tasks: dict[str, PeriodicTask] = {}

    @property
    def task_names(self) -> list[str]:
        """Names of the scheduled tasks."""
        return list(self._tasks)

    def get(self, name: str) -> PeriodicTask | None:
        """Get a scheduled task by name."""
        return self._tasks.get(name)

    def schedule(
        self,
        name: str,
        interval: float,
        callback: TaskCallback,
        *,
        now: float,
    ) -> PeriodicTask:
        """Schedule a task, replacing any task with the same name.

        Args:
            name: Unique task name.
            interval: Seconds between runs.
            callback: Called with the seconds elapsed since its previous run.
            now: Current clock time; the first run is one interval later.

        Returns:
            The scheduled task.

        Raises:
            ValidationError: If interval is not positive.
        """
        if interval <= 0:
            raise ValidationError(
                f"Task interval must be positive, got {interval}",
                field_name="interval",
                invalid_value=interval,
            )
        self.cancel(name)
        task = PeriodicTask(
            name=name,
            interval=interval,
            callback=callback,
            next_run=now + interval,
            last_run=now,
        )
        self._tasks[name] = task
        logger.debug("Task scheduled", task=name, interval=interval)
        return task

    def run_pending(self, now: float) -> int:
        """Run every due task once.

        A failing task is logged and does not stop the others.

        Returns:
            Number of tasks that ran.
        """
        ran = 0
        for task in list(self._tasks.values()):
            if not task.is_due(now):
                continue
            try:
                task.run(now)
            except Exception:
                logger.exception("Scheduled task failed", task=task.name)
            ran += 1
        return ran

    def cancel(self, name: str) -> bool:
        """Cancel a task.

        Returns:
            True if a task with that name existed.
        """
        task = self._tasks.pop(name, None)
        if task is None:
            return False
        task.cancelled = True
        logger.debug("Task cancelled", task=name, runs=task.runs)
        return True

    def cancel_all(self) -> None:
        """Cancel every task."""
        for name in list(self._tasks):
            self.cancel(name)


__all__ = [
    "TaskCallback",
    "PeriodicTask",
    "TaskScheduler",
]
