"""Schedule execution engine."""

from app.services.playout.executor import ScheduleExecutor
from app.services.playout.expander import build_schedule_items, expand_schedule
from app.services.playout.recurrence import generate_recurrences, is_recurrence_due
from app.services.playout.scheduler import SchedulerService

__all__ = [
    "ScheduleExecutor",
    "SchedulerService",
    "build_schedule_items",
    "expand_schedule",
    "generate_recurrences",
    "is_recurrence_due",
]
