from cleanops.db.database import Base

# Import models
from cleanops.db.models.recurring_shifts import RecurringShifts, RecurrenceType, PayType
from cleanops.db.models.schedule_entries import ScheduleEntries, ScheduleEntryStatus

__all__ = [
    "Base",
    # Models
    "RecurringShifts",
    "ScheduleEntries",
    # Enums
    "RecurrenceType",
    "PayType",
    "ScheduleEntryStatus",
]
