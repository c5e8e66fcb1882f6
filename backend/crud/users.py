import random
from typing import Optional
from sqlalchemy.orm import Session
from models.users import User
from schemas.auth import RegisterRequest, ProfileUpdate
from utils.auth_utils import hash_password, verify_password
from crud.activity_log import log_activity

AVATAR_COLORS = ['#6366f1', '#ec4899', '#f59e0b', '#10b981', '#3b82f6', '#8b5cf6', '#ef4444', '#14b8a6']


def get_user(db: Session, user_id: int) -> Optional[User]:
    return db.query(User).filter(User.id == user_id).first()


def get_user_by_email(db: Session, email: str) -> Optional[User]:
    return db.query(User).filter(User.email == email.lower()).first()


def create_user(db: Session, user: RegisterRequest) -> User:
    db_user = User(
        name=user.name,
        email=user.email.lower(),
        hashed_password=hash_password(user.password),
        role=user.role.value,
        phone=user.phone,
        avatar_color=random.choice(AVATAR_COLORS),
    )
    db.add(db_user)
    db.flush()
    log_activity(db, db_user.id, 'register', f"{db_user.name} registered as {db_user.role}", commit=False)
    db.commit()
    db.refresh(db_user)
    return db_user


def authenticate_user(db: Session, email: str, password: str) -> Optional[User]:
    db_user = get_user_by_email(db, email)
    if not db_user or not verify_password(password, db_user.hashed_password):
        return None
    return db_user


def update_profile(db: Session, user_id: int, profile: ProfileUpdate) -> Optional[User]:
    db_user = get_user(db, user_id)
    if not db_user:
        return None
    for key, value in profile.model_dump(exclude_unset=True).items():
        if key == "name" and not value:
            continue
        setattr(db_user, key, value)
    db.commit()
    db.refresh(db_user)
    return db_user
