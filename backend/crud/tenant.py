from typing import List, Optional
from sqlalchemy.orm import Session, joinedload
from models.property import Property
from models.tenant import Tenant
from models.users import User, UserRole
from schemas import tenant as schemas
from crud.activity_log import log_activity
from utils.scope import AccessScope


def get_owned_tenant(db: Session, tenant_id: int, owner_id: int) -> Optional[Tenant]:
    return db.query(Tenant).join(Property, Tenant.property_id == Property.id).filter(
        Tenant.id == tenant_id,
        Property.owner_id == owner_id,
    ).first()


def list_tenants(db: Session, scope: AccessScope, property_id: Optional[int] = None) -> List[Tenant]:
    query = scope.tenants(db).options(joinedload(Tenant.rental_property)).filter(Tenant.is_active.is_(True))
    if property_id is not None:
        query = query.filter(Tenant.property_id == property_id)
    return query.order_by(Tenant.created_at.desc(), Tenant.id.desc()).all()


def _find_tenant_user(db: Session, email: Optional[str]) -> Optional[int]:
    if not email:
        return None
    user = db.query(User).filter(User.email == email.lower(), User.role == UserRole.TENANT.value).first()
    return user.id if user else None


def create_tenant(db: Session, tenant: schemas.TenantCreate, owner_id: int) -> Tenant:
    db_tenant = Tenant(**tenant.model_dump(), user_id=_find_tenant_user(db, tenant.email))
    db.add(db_tenant)
    log_activity(db, owner_id, 'add_tenant', f"Added tenant {tenant.name} to property", commit=False)
    db.commit()
    db.refresh(db_tenant)
    return db_tenant


def update_tenant(db: Session, tenant_id: int, tenant: schemas.TenantUpdate, owner_id: int) -> Optional[Tenant]:
    db_tenant = get_owned_tenant(db, tenant_id, owner_id)
    if db_tenant:
        changes = tenant.model_dump(exclude_unset=True)
        for key, value in changes.items():
            if value is None and key in ("name", "is_active"):
                continue
            setattr(db_tenant, key, value)
        if "email" in changes:
            db_tenant.user_id = _find_tenant_user(db, db_tenant.email)
        db.commit()
        db.refresh(db_tenant)
    return db_tenant


def delete_tenant(db: Session, tenant_id: int, owner_id: int) -> Optional[Tenant]:
    # Soft-delete: the tenancy stops being billed, past charges are kept
    db_tenant = get_owned_tenant(db, tenant_id, owner_id)
    if db_tenant:
        db_tenant.is_active = False
        log_activity(db, owner_id, 'remove_tenant', f"Removed tenant {db_tenant.name}", commit=False)
        db.commit()
        db.refresh(db_tenant)
    return db_tenant
