"""Planning services."""

from .scheduler import SchedulerService, optimize_daily_plan

__all__ = ["SchedulerService", "optimize_daily_plan"]
