from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List
import logging
from database import get_db
from schemas import property as schemas
from crud import property as crud
from utils.auth_utils import require_role, get_user_identifier
from utils.scope import AccessScope, get_access_scope

router = APIRouter(
    prefix="/properties",
    tags=["Properties"],
)
logger = logging.getLogger(__name__)

landlord_only = require_role(["landlord"])


@router.get("/", response_model=List[schemas.PropertyWithStats])
def read_properties(db: Session = Depends(get_db), scope: AccessScope = Depends(get_access_scope)):
    return crud.list_properties(db, scope)


@router.get("/{property_id}", response_model=schemas.Property)
def read_property(property_id: int, db: Session = Depends(get_db), scope: AccessScope = Depends(get_access_scope)):
    db_property = crud.get_visible_property(db, property_id, scope)
    if db_property is None:
        raise HTTPException(status_code=404, detail="Property not found")
    return db_property


@router.post("/", response_model=schemas.Property, status_code=status.HTTP_201_CREATED)
def create_property(prop: schemas.PropertyCreate, db: Session = Depends(get_db), user: dict = Depends(landlord_only)):
    db_property = crud.create_property(db, prop, owner_id=get_user_identifier(user))
    logger.info(f"Property {db_property.id} created by user {db_property.owner_id}")
    return db_property


@router.put("/{property_id}", response_model=schemas.Property)
def update_property(property_id: int, prop: schemas.PropertyUpdate, db: Session = Depends(get_db), user: dict = Depends(landlord_only)):
    db_property = crud.update_property(db, property_id, prop, owner_id=get_user_identifier(user))
    if db_property is None:
        raise HTTPException(status_code=404, detail="Property not found")
    return db_property


@router.delete("/{property_id}")
def delete_property(property_id: int, db: Session = Depends(get_db), user: dict = Depends(landlord_only)):
    db_property = crud.delete_property(db, property_id, owner_id=get_user_identifier(user))
    if db_property is None:
        raise HTTPException(status_code=404, detail="Property not found")
    return {"message": "Property deleted"}
