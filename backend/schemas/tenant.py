from pydantic import BaseModel, Field
from datetime import date
from decimal import Decimal
from typing import Optional


class TenantBase(BaseModel):
    name: str = Field(..., min_length=1)
    email: Optional[str] = None
    phone: Optional[str] = None
    lease_start: Optional[date] = None
    lease_end: Optional[date] = None


class TenantCreate(TenantBase):
    property_id: int


class TenantUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    email: Optional[str] = None
    phone: Optional[str] = None
    lease_start: Optional[date] = None
    lease_end: Optional[date] = None
    is_active: Optional[bool] = None


class Tenant(TenantBase):
    id: int
    property_id: int
    user_id: Optional[int] = None
    is_active: bool
    property_name: Optional[str] = None

    class Config:
        from_attributes = True


class TenantLease(Tenant):
    """A tenancy together with the property terms a tenant pays against."""
    rent_amount: Optional[Decimal] = None
    address: Optional[str] = None
    due_day: Optional[int] = None
