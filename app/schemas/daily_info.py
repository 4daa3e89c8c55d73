# Pydantic-sémák a napi infóhoz és a dokumentumokhoz
from pydantic import BaseModel, Field, field_validator
from datetime import date, datetime
from typing import List, Optional
from app.services.calendar_helper import to_local_naive

class DailyInfoBase(BaseModel):
    date: date
    title: str = Field(..., min_length=1)
    content: str = ""
    deadline: Optional[datetime] = None
    completed: bool = False
    image_urls: List[str] = []

    @field_validator("deadline")
    @classmethod
    def deadline_to_local(cls, value):
        # A határidő mindig naiv, helyi idejű
        return to_local_naive(value) if value else value

class DailyInfoCreate(DailyInfoBase):
    pass

class DailyInfoUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1)
    content: Optional[str] = None
    deadline: Optional[datetime] = None
    completed: Optional[bool] = None
    image_urls: Optional[List[str]] = None

    @field_validator("title", "content", "completed")
    @classmethod
    def reject_null(cls, value):
        if value is None:
            raise ValueError("A mező nem lehet üres")
        return value

    @field_validator("deadline")
    @classmethod
    def deadline_to_local(cls, value):
        return to_local_naive(value) if value else value

class DailyInfoResponse(DailyInfoBase):
    id: int
    image_urls: Optional[List[str]] = None
    created_at: datetime

    class Config:
        from_attributes = True


class AttachmentCreate(BaseModel):
    date: date
    title: str = Field(..., min_length=1)
    file_url: Optional[str] = None

class AttachmentResponse(BaseModel):
    id: int
    date: date
    title: str
    status: str
    is_task_list: bool
    file_url: Optional[str] = None
    file_urls: Optional[List[str]] = None
    created_at: datetime

    class Config:
        from_attributes = True


class DayView(BaseModel):
    date: date
    week_number: int
    is_weekend: bool
    holiday: Optional[str] = None
    todo: List[DailyInfoResponse]
    done: List[DailyInfoResponse]
    completion_percentage: int
    attachments: List[AttachmentResponse]
    has_task_list: bool

class TaskListImportResult(BaseModel):
    attachment: AttachmentResponse
    tasks: List[DailyInfoResponse]


# Szöveg tagolás (cikkszám táblázat) kérés / válasz
class ContentRequest(BaseModel):
    content: str

class KeyValueItem(BaseModel):
    key: str
    value: str

class StructuredContent(BaseModel):
    affected: Optional[str] = None
    leading_description: str = ""
    items: List[KeyValueItem] = []
    trailing_description: str = ""
