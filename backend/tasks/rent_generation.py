"""
Monthly rent generation.

Once per billing cycle every billable tenancy (tenant active, property
active, rent above zero) gets exactly one pending rent charge dated to that
cycle. The work is split in two:

- ``plan_rent_charges`` is a pure function of (today, tenancy snapshot,
  tenancies already billed this month) and decides what to insert.
- ``generate_monthly_rent`` reads the snapshot from the database and inserts
  the planned charges, one transaction per tenancy.

``run_rent_generation`` is the zero-argument entry point used by the
scheduler and is safe to call any number of times for the same month.
"""

import calendar
import logging
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Iterable, List, Optional, Set, Tuple

import pytz
from sqlalchemy import extract
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from config import APP_TIMEZONE, RENT_DUE_DAY
from crud.activity_log import log_activity
from database import SessionLocal
from models.property import Property
from models.rent_transaction import PaymentMode, RentTransaction, TransactionStatus
from models.tenant import Tenant
from schemas.rent_generation import GenerationResult
from utils.formatting import format_indian_currency
from utils.scope import AccessScope

logger = logging.getLogger(__name__)

GENERATED_ACTION = "auto_generate_rent"


@dataclass(frozen=True)
class TenancySnapshot:
    tenant_id: int
    property_id: int
    owner_id: int
    rent_amount: Decimal
    active: bool = True


@dataclass(frozen=True)
class PlannedCharge:
    tenant_id: int
    property_id: int
    owner_id: int
    amount: Decimal
    due_date: date
    billing_period: str
    notes: str


def today_local() -> date:
    return datetime.now(pytz.timezone(APP_TIMEZONE)).date()


def billing_period(year: int, month: int) -> str:
    return f"{year:04d}-{month:02d}"


def due_date_for(year: int, month: int, due_day: int = RENT_DUE_DAY) -> date:
    # Clamp to the month length so a due day of 31 still works in February
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, max(1, min(due_day, last_day)))


def plan_rent_charges(
    today: date,
    tenancies: Iterable[TenancySnapshot],
    already_billed: Set[Tuple[int, int]],
    due_day: int = RENT_DUE_DAY,
) -> List[PlannedCharge]:
    """Decide which rent charges to create for the month containing ``today``.

    ``already_billed`` holds the (tenant_id, property_id) pairs that have any
    transaction due in that month. Those are skipped, as are inactive
    tenancies and zero-rent properties. The amount is the rent at planning
    time; later rent changes never touch a planned charge.
    """
    due_date = due_date_for(today.year, today.month, due_day)
    period = billing_period(today.year, today.month)
    notes = f"Auto-generated rent for {calendar.month_name[today.month]} {today.year}"

    planned = []
    seen = set(already_billed)
    for tenancy in tenancies:
        key = (tenancy.tenant_id, tenancy.property_id)
        if not tenancy.active or tenancy.rent_amount is None or tenancy.rent_amount <= 0:
            continue
        if key in seen:
            continue
        seen.add(key)
        planned.append(PlannedCharge(
            tenant_id=tenancy.tenant_id,
            property_id=tenancy.property_id,
            owner_id=tenancy.owner_id,
            amount=Decimal(tenancy.rent_amount),
            due_date=due_date,
            billing_period=period,
            notes=notes,
        ))
    return planned


def fetch_billable_tenancies(db: Session, scope: Optional[AccessScope] = None) -> List[TenancySnapshot]:
    query = db.query(
        Tenant.id, Tenant.property_id, Property.owner_id, Property.rent_amount
    ).join(Property, Tenant.property_id == Property.id).filter(
        Tenant.is_active.is_(True),
        Property.is_active.is_(True),
        Property.rent_amount > 0,
    )
    if scope is not None:
        query = query.filter(scope.property_filter())

    return [
        TenancySnapshot(
            tenant_id=row.id,
            property_id=row.property_id,
            owner_id=row.owner_id,
            rent_amount=Decimal(str(row.rent_amount)),
        )
        for row in query.order_by(Tenant.id).all()
    ]


def fetch_billed_pairs(db: Session, year: int, month: int) -> Set[Tuple[int, int]]:
    """(tenant_id, property_id) pairs with any transaction due in year/month.

    Matching is on the year and month of due_date, so an edited due date
    inside the same month still counts as billed.
    """
    rows = db.query(RentTransaction.tenant_id, RentTransaction.property_id).filter(
        RentTransaction.tenant_id.isnot(None),
        extract('year', RentTransaction.due_date) == year,
        extract('month', RentTransaction.due_date) == month,
    ).distinct().all()
    return {(row.tenant_id, row.property_id) for row in rows}


def _insert_charge(db: Session, charge: PlannedCharge):
    db_transaction = RentTransaction(
        property_id=charge.property_id,
        tenant_id=charge.tenant_id,
        amount=charge.amount,
        due_date=charge.due_date,
        mode=PaymentMode.CASH,
        status=TransactionStatus.PENDING,
        notes=charge.notes,
        billing_period=charge.billing_period,
        created_by=charge.owner_id,
    )
    db.add(db_transaction)
    log_activity(
        db, charge.owner_id, GENERATED_ACTION,
        f"Generated {format_indian_currency(charge.amount)} rent for {charge.billing_period}",
        commit=False,
    )
    db.commit()


def generate_monthly_rent(db: Session, today: Optional[date] = None, scope: Optional[AccessScope] = None) -> GenerationResult:
    """Insert this month's pending rent charges.

    Each charge is committed on its own, so one failing tenancy is rolled back
    and logged without affecting the others. A unique-constraint rejection
    means a concurrent run got there first and counts as skipped.
    """
    today = today or today_local()
    due_date = due_date_for(today.year, today.month)
    result = GenerationResult(period=billing_period(today.year, today.month), due_date=due_date)

    tenancies = fetch_billable_tenancies(db, scope)
    already_billed = fetch_billed_pairs(db, today.year, today.month)
    planned = plan_rent_charges(today, tenancies, already_billed)
    result.skipped = len(tenancies) - len(planned)

    logger.info(
        f"Rent generation for {result.period}: {len(tenancies)} billable tenancies, "
        f"{len(planned)} to create, {result.skipped} already billed."
    )

    for charge in planned:
        try:
            _insert_charge(db, charge)
            result.created += 1
        except IntegrityError:
            # Another run inserted this period after the billed pairs were read
            db.rollback()
            result.skipped += 1
            logger.warning(
                f"Rent for tenant {charge.tenant_id} on property {charge.property_id} "
                f"was generated concurrently for {charge.billing_period}; skipped."
            )
        except SQLAlchemyError as e:
            db.rollback()
            result.failed += 1
            logger.error(
                f"Failed to generate rent for tenant {charge.tenant_id} on property {charge.property_id}: {e}",
                exc_info=True,
            )

    logger.info(
        f"Rent generation for {result.period} finished: created={result.created}, "
        f"skipped={result.skipped}, failed={result.failed}."
    )
    return result


def run_rent_generation() -> Optional[GenerationResult]:
    """
    Runs rent generation for the current month. This function is scheduled.

    Never raises: if the database is unreachable the run is logged and left
    for the next scheduled tick.
    """
    db: Session = SessionLocal()
    try:
        return generate_monthly_rent(db)
    except SQLAlchemyError as e:
        logger.error(f"Rent generation aborted, will retry on next schedule: {e}", exc_info=True)
        db.rollback()
        return None
    finally:
        db.close()
