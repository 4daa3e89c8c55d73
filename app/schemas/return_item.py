# Pydantic-sémák a visszáru tételekhez
from pydantic import BaseModel, Field
from datetime import datetime
from typing import Dict, List, Optional

class ReturnItemResponse(BaseModel):
    id: int
    week_number: int
    return_type: str
    document_number: str
    document_custom_name: Optional[str] = None
    barcode: Optional[str] = None
    product_name: Optional[str] = None
    planned_quantity: Optional[int] = None
    quantity: Optional[int] = None
    manual: bool
    order: int
    created_at: datetime

    class Config:
        from_attributes = True

class QuantityAdd(BaseModel):
    week_number: int
    barcode: str
    quantity: Optional[int] = None

class QuantityUpdate(BaseModel):
    quantity: Optional[int] = Field(default=None, ge=0)

class DocumentRename(BaseModel):
    week_number: int
    document_custom_name: str = Field(..., min_length=1)

class ReturnWeekView(BaseModel):
    week_number: int
    documents: Dict[str, List[ReturnItemResponse]]

class BarcodeResult(BaseModel):
    barcode: str
    item: Optional[ReturnItemResponse] = None
