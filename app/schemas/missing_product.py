# Pydantic-sémák a hiánycikkekhez
from pydantic import BaseModel, Field
from datetime import date, datetime
from typing import Dict, List, Optional

class MissingProductCreate(BaseModel):
    date: date
    article_number: str = Field(..., min_length=1)
    product_name: str = Field(..., min_length=1)
    description: Optional[str] = None
    category: Optional[str] = "troso"

class MissingProductResponse(BaseModel):
    id: int
    date: date
    article_number: str
    product_name: str
    description: Optional[str] = None
    image_url: Optional[str] = None
    category: str
    status: str
    notes: Optional[str] = None
    resolved_date: Optional[date] = None
    created_at: datetime

    class Config:
        from_attributes = True

class StatusUpdate(BaseModel):
    status: str

class CategoryUpdate(BaseModel):
    category: str

class NotesUpdate(BaseModel):
    notes: Optional[str] = None

class MissingProductDayView(BaseModel):
    date: date
    products: List[MissingProductResponse]
    status_counts: Dict[str, int]
    category_counts: Dict[str, int]
    groups: Dict[str, List[MissingProductResponse]]

class DayMarker(BaseModel):
    date: date
    completed: bool
