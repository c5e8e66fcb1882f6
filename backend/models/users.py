from database import Base
from sqlalchemy import Column, Integer, String
from models.audit_mixin import TimestampMixin
import enum


class UserRole(str, enum.Enum):
    LANDLORD = "landlord"
    TENANT = "tenant"


class User(Base, TimestampMixin):
    __tablename__ = 'users'

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    role = Column(String(20), nullable=False)  # one of UserRole values
    phone = Column(String, nullable=True)
    avatar_color = Column(String(20), default="#6366f1")

    def __repr__(self):
        return f"<User(id={self.id}, email={self.email}, role={self.role})>"
