from pydantic import BaseModel, Field
from decimal import Decimal
from typing import Optional


class PropertyBase(BaseModel):
    name: str = Field(..., min_length=1)
    address: Optional[str] = ""
    rent_amount: Decimal = Field(..., ge=0)
    due_day: int = Field(1, ge=1, le=31)
    property_type: Optional[str] = "apartment"


class PropertyCreate(PropertyBase):
    pass


class PropertyUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    address: Optional[str] = None
    rent_amount: Optional[Decimal] = Field(None, ge=0)
    due_day: Optional[int] = Field(None, ge=1, le=31)
    property_type: Optional[str] = None


class Property(PropertyBase):
    id: int
    owner_id: int
    is_active: bool

    class Config:
        from_attributes = True


class PropertyWithStats(Property):
    tenant_count: int = 0
    total_collected: Optional[Decimal] = None
    overdue_count: Optional[int] = None
