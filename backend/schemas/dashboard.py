from pydantic import BaseModel
from typing import List
from decimal import Decimal
from schemas.rent_transaction import RentTransaction
from schemas.activity_log import ActivityLog
from schemas.tenant import TenantLease


class LandlordStats(BaseModel):
    property_count: int
    tenant_count: int
    monthly_income: Decimal
    total_collected: Decimal
    overdue_count: int
    pending_count: int


class LandlordDashboard(BaseModel):
    stats: LandlordStats
    recent_transactions: List[RentTransaction]
    recent_activity: List[ActivityLog]
    upcoming_dues: List[RentTransaction]


class TenantStats(BaseModel):
    total_paid: Decimal
    pending_amount: Decimal
    active_lease_count: int


class TenantDashboard(BaseModel):
    stats: TenantStats
    active_leases: List[TenantLease]
    recent_payments: List[RentTransaction]
    upcoming_dues: List[RentTransaction]
