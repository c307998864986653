"""Service layer exports."""

from .launch_selector import LaunchNotFoundError, select_next_launch
from .reports import AllureReportService

__all__ = ["AllureReportService", "LaunchNotFoundError", "select_next_launch"]
