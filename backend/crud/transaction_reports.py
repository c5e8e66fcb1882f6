"""
Aggregated rent transaction reports.

Every query here runs through an ``AccessScope`` so a landlord only ever sees
their own properties and a tenant only their own leases. Amounts are bucketed
by ``status`` ("paid" vs everything else) and attributed to the month of the
``due_date``; ``date_paid`` never moves a row between months.
"""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

import pytz
from sqlalchemy import Integer, case, cast, extract, func
from sqlalchemy.orm import Session

from config import APP_TIMEZONE
from models.property import Property
from models.rent_transaction import RentTransaction, TransactionStatus
from schemas.transaction_reports import (
    AnnualSummary,
    MonthlySummary,
    PaymentModeSummary,
    PropertySummary,
    TransactionSummary,
)
from utils.scope import AccessScope


def current_year() -> int:
    return datetime.now(pytz.timezone(APP_TIMEZONE)).year


def _is_paid():
    return RentTransaction.status == TransactionStatus.PAID


def _paid_amount():
    return func.coalesce(func.sum(case((_is_paid(), RentTransaction.amount), else_=0)), 0)


def _unpaid_amount():
    # pending and overdue both count as not yet paid
    unpaid = RentTransaction.status != TransactionStatus.PAID
    return func.coalesce(func.sum(case((unpaid, RentTransaction.amount), else_=0)), 0)


def _status_count(status: TransactionStatus):
    return func.count(case((RentTransaction.status == status, 1)))


def _scoped(db: Session, scope: AccessScope, year: int, property_id: Optional[int], *columns):
    query = scope.transactions(db, *columns).filter(
        extract('year', RentTransaction.due_date) == year
    )
    if property_id is not None:
        query = query.filter(RentTransaction.property_id == property_id)
    return query


def _decimal(value) -> Decimal:
    return Decimal(str(value)) if value is not None else Decimal(0)


def get_monthly_summary(db: Session, scope: AccessScope, year: int, property_id: Optional[int] = None) -> List[MonthlySummary]:
    """Per-month totals; months without transactions are left out."""
    month = cast(extract('month', RentTransaction.due_date), Integer).label("month")
    rows = _scoped(
        db, scope, year, property_id,
        month,
        _paid_amount().label("paid_amount"),
        _unpaid_amount().label("pending_amount"),
        _status_count(TransactionStatus.PAID).label("paid_count"),
        _status_count(TransactionStatus.PENDING).label("pending_count"),
        _status_count(TransactionStatus.OVERDUE).label("overdue_count"),
        func.count(RentTransaction.id).label("total_count"),
    ).group_by(month).order_by(month).all()

    return [
        MonthlySummary(
            month=int(row.month),
            paid_amount=_decimal(row.paid_amount),
            pending_amount=_decimal(row.pending_amount),
            paid_count=row.paid_count or 0,
            pending_count=row.pending_count or 0,
            overdue_count=row.overdue_count or 0,
            total_count=row.total_count or 0,
        )
        for row in rows
    ]


def get_annual_summary(db: Session, scope: AccessScope, year: int, property_id: Optional[int] = None) -> AnnualSummary:
    """Year totals. Always a complete record, all zeros when nothing matches."""
    row = _scoped(
        db, scope, year, property_id,
        _paid_amount().label("total_paid"),
        _unpaid_amount().label("total_pending"),
        _status_count(TransactionStatus.PAID).label("paid_count"),
        _status_count(TransactionStatus.OVERDUE).label("overdue_count"),
        func.count(RentTransaction.id).label("total_count"),
    ).one()

    return AnnualSummary(
        total_paid=_decimal(row.total_paid),
        total_pending=_decimal(row.total_pending),
        paid_count=row.paid_count or 0,
        overdue_count=row.overdue_count or 0,
        total_count=row.total_count or 0,
    )


def get_property_summary(db: Session, scope: AccessScope, year: int, property_id: Optional[int] = None) -> List[PropertySummary]:
    paid_amount = _paid_amount().label("paid_amount")
    rows = _scoped(
        db, scope, year, property_id,
        Property.id.label("property_id"),
        Property.name.label("property_name"),
        paid_amount,
        _unpaid_amount().label("pending_amount"),
        func.count(RentTransaction.id).label("total_count"),
    ).group_by(Property.id, Property.name).order_by(paid_amount.desc(), Property.id).all()

    return [
        PropertySummary(
            property_id=row.property_id,
            property_name=row.property_name,
            paid_amount=_decimal(row.paid_amount),
            pending_amount=_decimal(row.pending_amount),
            total_count=row.total_count or 0,
        )
        for row in rows
    ]


def get_payment_mode_summary(db: Session, scope: AccessScope, year: int, property_id: Optional[int] = None) -> List[PaymentModeSummary]:
    """Paid transactions only, grouped by payment mode."""
    rows = _scoped(
        db, scope, year, property_id,
        RentTransaction.mode.label("mode"),
        func.count(RentTransaction.id).label("count"),
        func.coalesce(func.sum(RentTransaction.amount), 0).label("total_amount"),
    ).filter(_is_paid()).group_by(RentTransaction.mode).order_by(RentTransaction.mode).all()

    return [
        PaymentModeSummary(mode=row.mode, count=row.count or 0, total_amount=_decimal(row.total_amount))
        for row in rows
    ]


def get_transaction_summary(db: Session, scope: AccessScope, year: Optional[int] = None, property_id: Optional[int] = None) -> TransactionSummary:
    """Monthly, annual, per-property and per-mode summaries for one scope and year."""
    if year is None:
        year = current_year()

    return TransactionSummary(
        year=year,
        monthly=get_monthly_summary(db, scope, year, property_id),
        annual=get_annual_summary(db, scope, year, property_id),
        by_property=get_property_summary(db, scope, year, property_id),
        by_mode=get_payment_mode_summary(db, scope, year, property_id),
    )
