from typing import Annotated, Any, Dict
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from starlette import status
from database import get_db
from models.users import User
from schemas.auth import LoginRequest, ProfileUpdate, RegisterRequest, Token, UserOut
from crud import users as crud_users
from utils.auth_utils import create_access_token, get_current_user, get_user_identifier
import logging

router = APIRouter(prefix="/auth", tags=["auth"])
logger = logging.getLogger(__name__)

db_dependency = Annotated[Session, Depends(get_db)]
user_dependency = Annotated[Dict[str, Any], Depends(get_current_user)]


def _token_for(user: User) -> Token:
    access_token = create_access_token(
        data={"sub": str(user.id), "name": user.name, "email": user.email, "role": user.role}
    )
    return Token(access_token=access_token, token_type="bearer", user=UserOut.model_validate(user))


@router.post("/register", response_model=Token, status_code=status.HTTP_201_CREATED)
def register_user(user: RegisterRequest, db: db_dependency):
    existing_user = crud_users.get_user_by_email(db, user.email)
    if existing_user:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Email already registered")

    new_user = crud_users.create_user(db, user)
    logger.info(f"User {new_user.id} registered as {new_user.role}")
    return _token_for(new_user)


@router.post("/login", response_model=Token)
def login(credentials: LoginRequest, db: db_dependency):
    db_user = crud_users.authenticate_user(db, credentials.email, credentials.password)
    if not db_user:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid email or password")
    return _token_for(db_user)


@router.get("/me", response_model=UserOut)
def read_me(user: user_dependency, db: db_dependency):
    db_user = crud_users.get_user(db, get_user_identifier(user))
    if db_user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return db_user


@router.put("/me", response_model=UserOut)
def update_me(profile: ProfileUpdate, user: user_dependency, db: db_dependency):
    if not profile.model_dump(exclude_unset=True):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No fields to update")
    db_user = crud_users.update_profile(db, get_user_identifier(user), profile)
    if db_user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return db_user
