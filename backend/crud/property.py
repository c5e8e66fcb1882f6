from typing import List, Optional
from sqlalchemy import func, select
from sqlalchemy.orm import Session
from models.property import Property
from models.rent_transaction import RentTransaction, TransactionStatus
from models.tenant import Tenant
from schemas import property as schemas
from crud.activity_log import log_activity
from utils.scope import AccessScope


def get_owned_property(db: Session, property_id: int, owner_id: int) -> Optional[Property]:
    return db.query(Property).filter(
        Property.id == property_id,
        Property.owner_id == owner_id,
        Property.is_active.is_(True),
    ).first()


def get_visible_property(db: Session, property_id: int, scope: AccessScope) -> Optional[Property]:
    return scope.properties(db).filter(
        Property.id == property_id,
        Property.is_active.is_(True),
    ).first()


def list_properties(db: Session, scope: AccessScope) -> List[dict]:
    """Active properties in scope; landlords also get collection stats."""
    tenant_count = (
        select(func.count(Tenant.id))
        .where(Tenant.property_id == Property.id, Tenant.is_active.is_(True))
        .correlate(Property)
        .scalar_subquery()
    )
    columns = [Property, tenant_count.label("tenant_count")]
    if scope.is_landlord:
        total_collected = (
            select(func.coalesce(func.sum(RentTransaction.amount), 0))
            .where(RentTransaction.property_id == Property.id, RentTransaction.status == TransactionStatus.PAID)
            .correlate(Property)
            .scalar_subquery()
        )
        overdue_count = (
            select(func.count(RentTransaction.id))
            .where(RentTransaction.property_id == Property.id, RentTransaction.status == TransactionStatus.OVERDUE)
            .correlate(Property)
            .scalar_subquery()
        )
        columns += [total_collected.label("total_collected"), overdue_count.label("overdue_count")]

    rows = scope.properties(db, *columns).filter(
        Property.is_active.is_(True)
    ).order_by(Property.created_at.desc(), Property.id.desc()).all()

    result = []
    for row in rows:
        item = schemas.PropertyWithStats.model_validate(row.Property).model_dump()
        item["tenant_count"] = row.tenant_count or 0
        if scope.is_landlord:
            item["total_collected"] = row.total_collected or 0
            item["overdue_count"] = row.overdue_count or 0
        result.append(item)
    return result


def create_property(db: Session, prop: schemas.PropertyCreate, owner_id: int) -> Property:
    db_property = Property(**prop.model_dump(), owner_id=owner_id)
    db.add(db_property)
    log_activity(db, owner_id, 'create_property', f"Created property: {prop.name}", commit=False)
    db.commit()
    db.refresh(db_property)
    return db_property


def update_property(db: Session, property_id: int, prop: schemas.PropertyUpdate, owner_id: int) -> Optional[Property]:
    """Update a property. Changing rent_amount only affects future generated charges."""
    db_property = get_owned_property(db, property_id, owner_id)
    if db_property:
        for key, value in prop.model_dump(exclude_unset=True).items():
            if value is not None:
                setattr(db_property, key, value)
        db.commit()
        db.refresh(db_property)
    return db_property


def delete_property(db: Session, property_id: int, owner_id: int) -> Optional[Property]:
    # Soft-delete: existing transactions keep pointing at the property
    db_property = get_owned_property(db, property_id, owner_id)
    if db_property:
        db_property.is_active = False
        log_activity(db, owner_id, 'delete_property', f"Deleted property: {db_property.name}", commit=False)
        db.commit()
        db.refresh(db_property)
    return db_property
