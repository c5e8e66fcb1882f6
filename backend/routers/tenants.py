from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List, Optional
from database import get_db
from schemas import tenant as schemas
from crud import tenant as crud
from crud.property import get_owned_property
from utils.auth_utils import require_role, get_user_identifier
from utils.scope import AccessScope, get_access_scope

router = APIRouter(
    prefix="/tenants",
    tags=["Tenants"],
)

landlord_only = require_role(["landlord"])


@router.get("/", response_model=List[schemas.Tenant])
def read_tenants(property_id: Optional[int] = None, db: Session = Depends(get_db), scope: AccessScope = Depends(get_access_scope)):
    if property_id is not None and scope.is_landlord:
        if get_owned_property(db, property_id, scope.identity_id) is None:
            raise HTTPException(status_code=404, detail="Property not found")
    return crud.list_tenants(db, scope, property_id=property_id)


@router.post("/", response_model=schemas.Tenant, status_code=status.HTTP_201_CREATED)
def create_tenant(tenant: schemas.TenantCreate, db: Session = Depends(get_db), user: dict = Depends(landlord_only)):
    owner_id = get_user_identifier(user)
    if get_owned_property(db, tenant.property_id, owner_id) is None:
        raise HTTPException(status_code=404, detail="Property not found")
    return crud.create_tenant(db, tenant, owner_id=owner_id)


@router.put("/{tenant_id}", response_model=schemas.Tenant)
def update_tenant(tenant_id: int, tenant: schemas.TenantUpdate, db: Session = Depends(get_db), user: dict = Depends(landlord_only)):
    db_tenant = crud.update_tenant(db, tenant_id, tenant, owner_id=get_user_identifier(user))
    if db_tenant is None:
        raise HTTPException(status_code=404, detail="Tenant not found")
    return db_tenant


@router.delete("/{tenant_id}")
def delete_tenant(tenant_id: int, db: Session = Depends(get_db), user: dict = Depends(landlord_only)):
    db_tenant = crud.delete_tenant(db, tenant_id, owner_id=get_user_identifier(user))
    if db_tenant is None:
        raise HTTPException(status_code=404, detail="Tenant not found")
    return {"message": "Tenant removed"}
