# Pydantic-sémák a munkavállalókhoz
from pydantic import BaseModel, Field, field_validator
from datetime import datetime
from typing import List, Optional

class EmployeeBase(BaseModel):
    name: str = Field(..., min_length=1)
    role: str = "bolti_dolgozo"

class EmployeeCreate(EmployeeBase):
    pass

class EmployeeUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    role: Optional[str] = None
    active: Optional[bool] = None

    @field_validator("name", "active")
    @classmethod
    def reject_null(cls, value):
        if value is None:
            raise ValueError("A mező nem lehet üres")
        return value

class EmployeeResponse(EmployeeBase):
    id: int
    active: bool
    created_at: datetime

    class Config:
        from_attributes = True

class EmployeeList(BaseModel):
    active: List[EmployeeResponse]
    inactive: List[EmployeeResponse]

class EmployeeImportResult(BaseModel):
    created: List[EmployeeResponse]
    message: Optional[str] = None
