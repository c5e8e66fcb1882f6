from pydantic import BaseModel, Field
from typing import List
from decimal import Decimal
from models.rent_transaction import PaymentMode


class MonthlySummary(BaseModel):
    month: int
    paid_amount: Decimal = Decimal(0)
    pending_amount: Decimal = Decimal(0)
    paid_count: int = 0
    pending_count: int = 0
    overdue_count: int = 0
    total_count: int = 0


class AnnualSummary(BaseModel):
    total_paid: Decimal = Decimal(0)
    total_pending: Decimal = Decimal(0)
    paid_count: int = 0
    overdue_count: int = 0
    total_count: int = 0


class PropertySummary(BaseModel):
    property_id: int
    property_name: str
    paid_amount: Decimal = Decimal(0)
    pending_amount: Decimal = Decimal(0)
    total_count: int = 0


class PaymentModeSummary(BaseModel):
    mode: PaymentMode
    count: int = 0
    total_amount: Decimal = Decimal(0)


class TransactionSummary(BaseModel):
    year: int
    monthly: List[MonthlySummary] = []
    annual: AnnualSummary = Field(default_factory=AnnualSummary)
    by_property: List[PropertySummary] = Field(default_factory=list, alias="byProperty")
    by_mode: List[PaymentModeSummary] = Field(default_factory=list, alias="byMode")

    class Config:
        populate_by_name = True
