from enum import Enum


class DisplayState(str, Enum):
    COMPLETED = "Completed"
    PENDING = "Pending"
    LATE = "Late"
    MISSED = "Missed"
    CANCELLED = "Cancelled"
