from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import date, datetime
from decimal import Decimal
from models.rent_transaction import PaymentMode, TransactionStatus


class RentTransactionBase(BaseModel):
    property_id: int
    tenant_id: Optional[int] = None
    amount: Decimal = Field(..., ge=0)
    due_date: date
    date_paid: Optional[date] = None
    mode: PaymentMode = PaymentMode.CASH
    status: TransactionStatus = TransactionStatus.PENDING
    notes: Optional[str] = None


class RentTransactionCreate(RentTransactionBase):
    pass


class RentTransactionUpdate(BaseModel):
    amount: Optional[Decimal] = Field(None, ge=0)
    due_date: Optional[date] = None
    date_paid: Optional[date] = None
    mode: Optional[PaymentMode] = None
    status: Optional[TransactionStatus] = None
    notes: Optional[str] = None


class RentTransaction(RentTransactionBase):
    id: int
    receipt_path: Optional[str] = None
    billing_period: Optional[str] = None
    created_by: Optional[int] = None
    created_at: Optional[datetime] = None
    property_name: Optional[str] = None
    tenant_name: Optional[str] = None

    class Config:
        from_attributes = True


class RentTransactionList(BaseModel):
    transactions: List[RentTransaction]
    total: int
