from sqlalchemy import Column, Integer, String, Numeric, Boolean, ForeignKey, Text
from sqlalchemy.orm import relationship
from database import Base
from models.audit_mixin import TimestampMixin


class Property(Base, TimestampMixin):
    __tablename__ = "properties"

    id = Column(Integer, primary_key=True, index=True)
    owner_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String, nullable=False)
    address = Column(Text, nullable=True)
    rent_amount = Column(Numeric(12, 2), nullable=False, default=0)
    due_day = Column(Integer, nullable=False, default=1)  # display only, generated charges use RENT_DUE_DAY
    property_type = Column(String(50), default="apartment")
    is_active = Column(Boolean, nullable=False, default=True)

    # Relationships
    owner = relationship("User")
    tenants = relationship("Tenant", back_populates="rental_property")
