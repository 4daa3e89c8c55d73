# Pydantic-sémák a heti és az azonnali infókhoz
from pydantic import BaseModel, Field
from datetime import date, datetime

class WeeklyInfoCreate(BaseModel):
    week_number: int = Field(..., ge=1, le=53)
    title: str = Field(..., min_length=1)
    content: str = ""

class WeeklyInfoResponse(WeeklyInfoCreate):
    id: int
    is_archived: bool
    created_at: datetime

    class Config:
        from_attributes = True

class InstantInfoCreate(BaseModel):
    date: date
    title: str = Field(..., min_length=1)
    content: str = ""

class InstantInfoResponse(InstantInfoCreate):
    id: int
    is_archived: bool
    created_at: datetime

    class Config:
        from_attributes = True
