from datetime import date, timedelta
from decimal import Decimal

from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from crud.activity_log import get_recent_activity
from models.property import Property
from models.rent_transaction import RentTransaction, TransactionStatus
from models.tenant import Tenant
from schemas.activity_log import ActivityLog as ActivityLogSchema
from schemas.dashboard import LandlordDashboard, LandlordStats, TenantDashboard, TenantStats
from schemas.rent_transaction import RentTransaction as RentTransactionSchema
from schemas.tenant import TenantLease
from utils.scope import AccessScope

UNPAID_STATUSES = (TransactionStatus.PENDING, TransactionStatus.OVERDUE)


def _month_bounds(today: date):
    start = today.replace(day=1)
    next_month = (start + timedelta(days=32)).replace(day=1)
    return start, next_month - timedelta(days=1)


def _sum_amount(db: Session, scope: AccessScope, *criteria) -> Decimal:
    total = scope.transactions(db, func.coalesce(func.sum(RentTransaction.amount), 0)).filter(*criteria).scalar()
    return Decimal(str(total)) if total is not None else Decimal(0)


def _count(db: Session, scope: AccessScope, *criteria) -> int:
    return scope.transactions(db, func.count(RentTransaction.id)).filter(*criteria).scalar() or 0


def _with_names(query):
    return query.options(joinedload(RentTransaction.rental_property), joinedload(RentTransaction.tenant))


def _as_schema(schema, rows):
    return [schema.model_validate(row) for row in rows]


def _lease(tenant: Tenant) -> TenantLease:
    lease = TenantLease.model_validate(tenant)
    rental_property = tenant.rental_property
    return lease.model_copy(update={
        "rent_amount": rental_property.rent_amount,
        "address": rental_property.address,
        "due_day": rental_property.due_day,
    })


def get_landlord_dashboard(db: Session, scope: AccessScope, today: date) -> LandlordDashboard:
    month_start, month_end = _month_bounds(today)

    property_count = scope.properties(db, func.count(Property.id)).filter(Property.is_active.is_(True)).scalar() or 0
    tenant_count = scope.tenants(db, func.count(Tenant.id)).filter(
        Tenant.is_active.is_(True),
        Property.is_active.is_(True),
    ).scalar() or 0

    stats = LandlordStats(
        property_count=property_count,
        tenant_count=tenant_count,
        monthly_income=_sum_amount(
            db, scope,
            RentTransaction.status == TransactionStatus.PAID,
            RentTransaction.due_date.between(month_start, month_end),
        ),
        total_collected=_sum_amount(db, scope, RentTransaction.status == TransactionStatus.PAID),
        overdue_count=_count(db, scope, RentTransaction.status == TransactionStatus.OVERDUE),
        pending_count=_count(db, scope, RentTransaction.status == TransactionStatus.PENDING),
    )

    recent_transactions = _with_names(scope.transactions(db)).order_by(
        RentTransaction.created_at.desc(), RentTransaction.id.desc()
    ).limit(10).all()

    upcoming_dues = _with_names(scope.transactions(db)).filter(
        RentTransaction.status.in_(UNPAID_STATUSES),
        RentTransaction.due_date.between(today, today + timedelta(days=30)),
    ).order_by(RentTransaction.due_date.asc(), RentTransaction.id).limit(10).all()

    return LandlordDashboard(
        stats=stats,
        recent_transactions=_as_schema(RentTransactionSchema, recent_transactions),
        recent_activity=_as_schema(ActivityLogSchema, get_recent_activity(db, scope.identity_id)),
        upcoming_dues=_as_schema(RentTransactionSchema, upcoming_dues),
    )


def get_tenant_dashboard(db: Session, scope: AccessScope) -> TenantDashboard:
    active_leases = scope.tenants(db).options(joinedload(Tenant.rental_property)).filter(
        Tenant.is_active.is_(True)
    ).all()

    stats = TenantStats(
        total_paid=_sum_amount(db, scope, RentTransaction.status == TransactionStatus.PAID),
        pending_amount=_sum_amount(db, scope, RentTransaction.status.in_(UNPAID_STATUSES)),
        active_lease_count=len(active_leases),
    )

    recent_payments = _with_names(scope.transactions(db)).order_by(
        RentTransaction.created_at.desc(), RentTransaction.id.desc()
    ).limit(10).all()

    upcoming_dues = _with_names(scope.transactions(db)).filter(
        RentTransaction.status.in_(UNPAID_STATUSES)
    ).order_by(RentTransaction.due_date.asc(), RentTransaction.id).limit(10).all()

    return TenantDashboard(
        stats=stats,
        active_leases=[_lease(tenant) for tenant in active_leases],
        recent_payments=_as_schema(RentTransactionSchema, recent_payments),
        upcoming_dues=_as_schema(RentTransactionSchema, upcoming_dues),
    )
