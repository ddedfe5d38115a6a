"""Background jobs."""

from .semester_allocation import register_scheduler, run_allocation_once

__all__ = ["register_scheduler", "run_allocation_once"]
