# Pydantic-sémák az elosztási tételekhez
from pydantic import BaseModel
from datetime import date, datetime
from typing import Dict, List, Optional

class DistributionResponse(BaseModel):
    id: int
    date: date
    delivery_note_number: str
    main_category: Optional[str] = None
    area: Optional[str] = None
    product_name: str
    article_number: str
    quantity: int
    unit: str
    received_quantity: Optional[int] = None
    status: str
    note: Optional[str] = None
    image_url: Optional[str] = None
    order: int
    created_at: datetime

    class Config:
        from_attributes = True

class ReceivedUpdate(BaseModel):
    received_quantity: Optional[int] = None  # None = visszaállítás ellenőrizetlenre

class NoteUpdate(BaseModel):
    note: str = ""

class DistributionDayView(BaseModel):
    date: date
    groups: Dict[str, List[DistributionResponse]]
    total: int
