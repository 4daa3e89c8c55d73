from .daily_info import DailyInfoCreate, DailyInfoUpdate, DailyInfoResponse, AttachmentCreate, AttachmentResponse, DayView
from .employee import EmployeeCreate, EmployeeUpdate, EmployeeResponse
from .schedule import ShiftCreate, ShiftUpdate, ScheduleResponse

__all__ = [
    "DailyInfoCreate",
    "DailyInfoUpdate",
    "DailyInfoResponse",
    "AttachmentCreate",
    "AttachmentResponse",
    "DayView",
    "EmployeeCreate",
    "EmployeeUpdate",
    "EmployeeResponse",
    "ShiftCreate",
    "ShiftUpdate",
    "ScheduleResponse",
]
