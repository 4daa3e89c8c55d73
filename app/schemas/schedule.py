# Pydantic-sémák a beosztáshoz
from pydantic import BaseModel, Field
from datetime import date, datetime
from typing import List, Optional

class ShiftCreate(BaseModel):
    date: date
    employee_id: Optional[int] = None  # törzsbeli dolgozó
    employee_name: Optional[str] = None  # kézi név, ha nincs employee_id
    shift_text: str = ""
    status: str = "muszak"
    num_breaks_taken: int = Field(default=0, ge=0)

class ShiftUpdate(BaseModel):
    shift_text: Optional[str] = None
    status: Optional[str] = None
    num_breaks_taken: Optional[int] = Field(default=None, ge=0)

class BreakToggle(BaseModel):
    n: int = Field(..., ge=1, le=2)

class ScheduleResponse(BaseModel):
    id: int
    week_number: int
    date: date
    employee_id: str
    employee_name: str
    employee_role: Optional[str] = None
    shift_text: Optional[str] = None
    net_shift_duration: Optional[str] = None
    start_time: Optional[str] = None
    status: str
    num_breaks_taken: int
    created_at: datetime

    class Config:
        from_attributes = True

class ScheduleDayRow(BaseModel):
    schedule: ScheduleResponse
    entitled_breaks: int

class ScheduleDayView(BaseModel):
    date: date
    week_number: int
    rows: List[ScheduleDayRow]

class DeleteCount(BaseModel):
    deleted: int
