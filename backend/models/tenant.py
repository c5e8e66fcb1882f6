from sqlalchemy import Column, Integer, String, Date, Boolean, ForeignKey
from sqlalchemy.orm import relationship
from database import Base
from models.audit_mixin import TimestampMixin


class Tenant(Base, TimestampMixin):
    """A tenancy: one tenant occupying one property.

    ``user_id`` is only set when the tenant has a login of their own; it is
    what tenant-role scopes match against.
    """
    __tablename__ = "tenants"

    id = Column(Integer, primary_key=True, index=True)
    property_id = Column(Integer, ForeignKey("properties.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)
    name = Column(String, nullable=False)
    email = Column(String, nullable=True)
    phone = Column(String, nullable=True)
    lease_start = Column(Date, nullable=True)
    lease_end = Column(Date, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)

    # Relationships
    rental_property = relationship("Property", back_populates="tenants")

    @property
    def property_name(self):
        return self.rental_property.name if self.rental_property else None
