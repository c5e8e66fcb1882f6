from datetime import date
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from typing import Optional
import logging
from database import get_db
from models.rent_transaction import TransactionStatus
from schemas import rent_transaction as schemas
from schemas.transaction_reports import TransactionSummary
from crud import rent_transaction as crud
from crud import transaction_reports as crud_reports
from utils.auth_utils import get_user_identifier, require_role
from utils.scope import AccessScope, get_access_scope

router = APIRouter(
    prefix="/transactions",
    tags=["Transactions"],
)
logger = logging.getLogger(__name__)


@router.get("/", response_model=schemas.RentTransactionList)
def read_transactions(
    property_id: Optional[int] = None,
    tenant_id: Optional[int] = None,
    status: Optional[TransactionStatus] = None,
    from_date: Optional[date] = None,
    to_date: Optional[date] = None,
    limit: int = Query(50, ge=1, le=500),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
    scope: AccessScope = Depends(get_access_scope),
):
    transactions, total = crud.list_transactions(
        db, scope,
        property_id=property_id,
        tenant_id=tenant_id,
        status=status,
        from_date=from_date,
        to_date=to_date,
        limit=limit,
        offset=offset,
    )
    return {"transactions": transactions, "total": total}


@router.get("/summary", response_model=TransactionSummary)
def read_transaction_summary(
    year: Optional[int] = Query(None, ge=1970, le=9999),
    property_id: Optional[int] = None,
    db: Session = Depends(get_db),
    scope: AccessScope = Depends(get_access_scope),
):
    """Monthly, annual, per-property and per-payment-mode totals for one year."""
    return crud_reports.get_transaction_summary(db, scope, year=year, property_id=property_id)


@router.get("/{transaction_id}", response_model=schemas.RentTransaction)
def read_transaction(transaction_id: int, db: Session = Depends(get_db), scope: AccessScope = Depends(get_access_scope)):
    db_transaction = crud.get_transaction(db, transaction_id, scope)
    if db_transaction is None:
        raise HTTPException(status_code=404, detail="Transaction not found")
    return db_transaction


@router.post("/", response_model=schemas.RentTransaction, status_code=201)
def create_transaction(
    transaction: schemas.RentTransactionCreate,
    db: Session = Depends(get_db),
    scope: AccessScope = Depends(get_access_scope),
):
    db_transaction = crud.create_transaction(db, transaction, scope)
    if db_transaction is None:
        raise HTTPException(status_code=404, detail="Property not found")
    return db_transaction


@router.put("/{transaction_id}", response_model=schemas.RentTransaction)
def update_transaction(
    transaction_id: int,
    transaction: schemas.RentTransactionUpdate,
    db: Session = Depends(get_db),
    scope: AccessScope = Depends(get_access_scope),
):
    try:
        db_transaction = crud.update_transaction(db, transaction_id, transaction, user_id=scope.identity_id)
    except IntegrityError:
        raise HTTPException(status_code=409, detail="Rent for that month is already recorded for this tenancy")
    if db_transaction is None:
        raise HTTPException(status_code=404, detail="Transaction not found")
    return db_transaction


@router.delete("/{transaction_id}")
def delete_transaction(
    transaction_id: int,
    db: Session = Depends(get_db),
    user: dict = Depends(require_role(["landlord"])),
):
    db_transaction = crud.delete_transaction(db, transaction_id, owner_id=get_user_identifier(user))
    if db_transaction is None:
        raise HTTPException(status_code=404, detail="Transaction not found")
    return {"message": "Transaction deleted"}
