from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User roles used for access decisions."""

    CEO = "CEO"
    ADMIN = "Admin"
    MANAGER = "Manager"
    HR = "HR"
    TEAM_LEADER = "Team Leader"
    EXECUTIVE = "Executive"


class AttendanceStatus(str, Enum):
    PRESENT = "Present"
    ABSENT = "Absent"
    LATE = "Late"
    HALF_DAY = "Half-Day"


class ActivityType(str, Enum):
    """Kinds of segment inside one day's activity log."""

    WORK = "Work"
    BIO_BREAK = "Bio Break"
    LUNCH_BREAK = "Lunch Break"
    MEETING = "Meeting"


class RequestStatus(str, Enum):
    """Leave approval workflow."""

    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"


class LeaveType(str, Enum):
    SICK = "Sick"
    VACATION = "Vacation"
    PERSONAL = "Personal"


class PayrollStatus(str, Enum):
    PAID = "Paid"
    PROCESSING = "Processing"


class LeadStatus(str, Enum):
    NEW = "New"
    CONTACTED = "Contacted"
    IN_PROGRESS = "In Progress"
    CONVERTED = "Converted"
    LOST = "Lost"


class Priority(str, Enum):
    HIGH = "High"
    NORMAL = "Normal"
    LOW = "Low"


class AnnouncementTone(str, Enum):
    FORMAL = "Formal"
    EXCITED = "Excited"
    URGENT = "Urgent"
    CASUAL = "Casual"


class EventType(str, Enum):
    MEETING = "Meeting"
    HOLIDAY = "Holiday"
    DEADLINE = "Deadline"


class MessageKind(str, Enum):
    TEXT = "text"
    IMAGE = "image"
    FILE = "file"


class DayType(str, Enum):
    """Classification of one calendar cell."""

    WORK = "work"
    LATE = "late"
    HALF_DAY = "half-day"
    ABSENT = "absent"
    LEAVE = "leave"
    HOLIDAY = "holiday"
    WEEKEND = "weekend"
    READY = "ready"
    FUTURE = "future"
