from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from database import get_db
from schemas.dashboard import LandlordDashboard, TenantDashboard
from crud import dashboard as crud_dashboard
from tasks.rent_generation import today_local
from utils.scope import AccessScope, get_access_scope

router = APIRouter(
    prefix="/dashboard",
    tags=["Dashboard"],
)


@router.get("/landlord", response_model=LandlordDashboard)
def get_landlord_dashboard(db: Session = Depends(get_db), scope: AccessScope = Depends(get_access_scope)):
    if not scope.is_landlord:
        raise HTTPException(status_code=403, detail="Access denied")
    return crud_dashboard.get_landlord_dashboard(db, scope, today=today_local())


@router.get("/tenant", response_model=TenantDashboard)
def get_tenant_dashboard(db: Session = Depends(get_db), scope: AccessScope = Depends(get_access_scope)):
    if scope.is_landlord:
        raise HTTPException(status_code=403, detail="Access denied")
    return crud_dashboard.get_tenant_dashboard(db, scope)
