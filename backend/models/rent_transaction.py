from sqlalchemy import Column, Integer, String, Numeric, Date, ForeignKey, Text, Enum, UniqueConstraint
from sqlalchemy.orm import relationship
from database import Base
from models.audit_mixin import TimestampMixin
import enum


class TransactionStatus(str, enum.Enum):
    PENDING = "pending"
    PAID = "paid"
    OVERDUE = "overdue"


class PaymentMode(str, enum.Enum):
    CASH = "cash"
    BANK_TRANSFER = "bank_transfer"
    UPI = "upi"
    CHEQUE = "cheque"
    OTHER = "other"


def _enum_values(enum_cls):
    return [member.value for member in enum_cls]


class RentTransaction(Base, TimestampMixin):
    """One billing-period rent charge for a property (and usually a tenant)."""
    __tablename__ = "rent_transactions"
    # billing_period is only set on auto-generated rows, NULLs never collide
    __table_args__ = (
        UniqueConstraint('tenant_id', 'property_id', 'billing_period', name='_tenant_property_period_uc'),
    )

    id = Column(Integer, primary_key=True, index=True)
    property_id = Column(Integer, ForeignKey("properties.id", ondelete="CASCADE"), nullable=False, index=True)
    tenant_id = Column(Integer, ForeignKey("tenants.id", ondelete="SET NULL"), nullable=True, index=True)
    amount = Column(Numeric(12, 2), nullable=False)
    due_date = Column(Date, nullable=False, index=True)
    date_paid = Column(Date, nullable=True)
    mode = Column(
        Enum(PaymentMode, name="payment_mode", values_callable=_enum_values),
        nullable=False,
        default=PaymentMode.CASH,
    )
    status = Column(
        Enum(TransactionStatus, name="transaction_status", values_callable=_enum_values),
        nullable=False,
        default=TransactionStatus.PENDING,
    )
    notes = Column(Text, nullable=True)
    receipt_path = Column(String(500), nullable=True)
    billing_period = Column(String(7), nullable=True)  # "YYYY-MM"
    created_by = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)

    # Relationships
    rental_property = relationship("Property")
    tenant = relationship("Tenant")

    @property
    def property_name(self):
        return self.rental_property.name if self.rental_property else None

    @property
    def tenant_name(self):
        return self.tenant.name if self.tenant else None
