"""Use cases de lembretes."""

from .dispatch_reminders import DispatchResult, DispatchSummary, ReminderDispatcher

__all__ = [
    "DispatchResult",
    "DispatchSummary",
    "ReminderDispatcher",
]
