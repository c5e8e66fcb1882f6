import logging
from datetime import date
from typing import List, Optional, Tuple

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from crud.activity_log import log_activity
from models.property import Property
from models.rent_transaction import RentTransaction, TransactionStatus
from models.tenant import Tenant
from schemas import rent_transaction as schemas
from tasks.rent_generation import billing_period
from utils import changed_fields, sqlalchemy_to_dict
from utils.formatting import format_indian_currency
from utils.scope import AccessScope

logger = logging.getLogger(__name__)


def _warn_if_paid_without_date(db_transaction: RentTransaction):
    # Accepted as-is; reports bucket by status whether or not date_paid is set
    if db_transaction.status == TransactionStatus.PAID and db_transaction.date_paid is None:
        logger.warning(
            f"Rent transaction {db_transaction.id} is marked paid without a payment date "
            f"(property {db_transaction.property_id}, due {db_transaction.due_date})."
        )


def list_transactions(
    db: Session,
    scope: AccessScope,
    property_id: Optional[int] = None,
    tenant_id: Optional[int] = None,
    status: Optional[TransactionStatus] = None,
    from_date: Optional[date] = None,
    to_date: Optional[date] = None,
    limit: int = 50,
    offset: int = 0,
) -> Tuple[List[RentTransaction], int]:
    query = scope.transactions(db)

    if property_id is not None:
        query = query.filter(RentTransaction.property_id == property_id)
    if tenant_id is not None:
        query = query.filter(RentTransaction.tenant_id == tenant_id)
    if status:
        query = query.filter(RentTransaction.status == status)
    if from_date:
        query = query.filter(RentTransaction.due_date >= from_date)
    if to_date:
        query = query.filter(RentTransaction.due_date <= to_date)

    total = query.count()
    transactions = (
        query.options(joinedload(RentTransaction.rental_property), joinedload(RentTransaction.tenant))
        .order_by(RentTransaction.due_date.desc(), RentTransaction.id.desc())
        .offset(offset)
        .limit(limit)
        .all()
    )
    return transactions, total


def get_transaction(db: Session, transaction_id: int, scope: AccessScope) -> Optional[RentTransaction]:
    return scope.transactions(db).filter(RentTransaction.id == transaction_id).first()


def _own_tenancy(db: Session, user_id: int, property_id: int, tenant_id: Optional[int]) -> Optional[Tenant]:
    query = db.query(Tenant).filter(
        Tenant.user_id == user_id,
        Tenant.property_id == property_id,
        Tenant.is_active.is_(True),
    )
    if tenant_id is not None:
        query = query.filter(Tenant.id == tenant_id)
    return query.first()


def create_transaction(db: Session, transaction: schemas.RentTransactionCreate, scope: AccessScope) -> Optional[RentTransaction]:
    """Record a charge or payment.

    Landlords may record against any property they own. Tenants may only record
    against their own active tenancy, which also fills in ``tenant_id``.
    Returns None when the property (or tenancy) is not accessible.
    """
    data = transaction.model_dump()
    if scope.is_landlord:
        db_property = db.query(Property).filter(
            Property.id == transaction.property_id,
            Property.owner_id == scope.identity_id,
        ).first()
        if db_property is None:
            return None
        if transaction.tenant_id is not None:
            tenant_on_property = db.query(Tenant).filter(
                Tenant.id == transaction.tenant_id,
                Tenant.property_id == transaction.property_id,
            ).first()
            if tenant_on_property is None:
                return None
    else:
        tenancy = _own_tenancy(db, scope.identity_id, transaction.property_id, transaction.tenant_id)
        if tenancy is None:
            return None
        data["tenant_id"] = tenancy.id

    db_transaction = RentTransaction(**data, created_by=scope.identity_id)
    db.add(db_transaction)
    db.flush()
    log_activity(
        db, scope.identity_id, 'create_transaction',
        f"Recorded {format_indian_currency(transaction.amount)} transaction for {transaction.due_date.isoformat()}",
        commit=False,
    )
    db.commit()
    db.refresh(db_transaction)
    _warn_if_paid_without_date(db_transaction)
    logger.info(f"Rent transaction {db_transaction.id} created by user {scope.identity_id} for property {db_transaction.property_id}")
    return db_transaction


def get_editable_transaction(db: Session, transaction_id: int, user_id: int) -> Optional[RentTransaction]:
    """A transaction the user may edit: on a property they own, or one they created."""
    return db.query(RentTransaction).join(Property, RentTransaction.property_id == Property.id).filter(
        RentTransaction.id == transaction_id,
        or_(Property.owner_id == user_id, RentTransaction.created_by == user_id),
    ).first()


def update_transaction(db: Session, transaction_id: int, transaction: schemas.RentTransactionUpdate, user_id: int) -> Optional[RentTransaction]:
    """Apply a partial update.

    A generated row keeps its ``billing_period`` in step with ``due_date``, so
    moving the due date into another month moves the row to that period. If
    another generated row already holds that period the store rejects it and
    the ``IntegrityError`` is re-raised after rollback.
    """
    db_transaction = get_editable_transaction(db, transaction_id, user_id)
    if db_transaction:
        old_values = sqlalchemy_to_dict(db_transaction)
        for key, value in transaction.model_dump(exclude_unset=True).items():
            # Only nullable columns may be cleared explicitly
            if value is None and key not in ("date_paid", "notes"):
                continue
            setattr(db_transaction, key, value)
        if db_transaction.billing_period is not None:
            db_transaction.billing_period = billing_period(db_transaction.due_date.year, db_transaction.due_date.month)
        new_due_date = db_transaction.due_date
        try:
            db.flush()
            changes = changed_fields(old_values, sqlalchemy_to_dict(db_transaction))
            if changes:
                log_activity(
                    db, user_id, 'update_transaction',
                    f"Updated transaction {transaction_id}: {', '.join(sorted(changes))}",
                    commit=False,
                )
            db.commit()
        except IntegrityError:
            db.rollback()
            logger.warning(
                f"Rent transaction {transaction_id} cannot move to {new_due_date}: "
                f"that period is already billed for the same tenancy."
            )
            raise
        db.refresh(db_transaction)
        _warn_if_paid_without_date(db_transaction)
    return db_transaction


def delete_transaction(db: Session, transaction_id: int, owner_id: int) -> Optional[RentTransaction]:
    """Hard-delete a transaction on a property owned by ``owner_id``."""
    db_transaction = db.query(RentTransaction).join(Property, RentTransaction.property_id == Property.id).filter(
        RentTransaction.id == transaction_id,
        Property.owner_id == owner_id,
    ).first()
    if db_transaction:
        details = (
            f"Deleted {format_indian_currency(db_transaction.amount)} transaction "
            f"due {db_transaction.due_date.isoformat()}"
        )
        db.delete(db_transaction)
        log_activity(db, owner_id, 'delete_transaction', details, commit=False)
        db.commit()
        logger.info(f"Rent transaction {transaction_id} deleted by user {owner_id}")
    return db_transaction
