from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional
from datetime import date


class HolidayCreate(BaseModel):
    """Schema for adding a holiday (Admin only)"""
    name: str = Field(..., min_length=1, max_length=255)
    date: date
    is_floating: bool = False

    @field_validator('name')
    @classmethod
    def strip_name(cls, v):
        v = v.strip()
        if not v:
            raise ValueError("Name is required")
        return v


class HolidayResponse(BaseModel):
    id: str
    name: str
    date: date
    is_floating: bool = False
    weekday: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)
