"""
Access scope resolution.

Every read of rent transactions, properties and tenants goes through an
``AccessScope``: it turns the authenticated identity and role into the
row filter for that identity, so the role branching lives in one place
instead of in each query.

    landlord -> rows whose property is owned by the identity
    tenant   -> rows whose tenant record is linked to the identity
"""

from dataclasses import dataclass
from typing import Any, Dict, Union

from fastapi import Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.orm import Session

from models.property import Property
from models.rent_transaction import RentTransaction
from models.tenant import Tenant
from models.users import UserRole
from utils.auth_utils import get_current_user


class ScopeError(ValueError):
    """Raised when an identity/role pair cannot be turned into a scope."""


@dataclass(frozen=True)
class AccessScope:
    identity_id: int
    role: UserRole

    @property
    def is_landlord(self) -> bool:
        return self.role is UserRole.LANDLORD

    def transaction_filter(self):
        if self.is_landlord:
            return Property.owner_id == self.identity_id
        return Tenant.user_id == self.identity_id

    def property_filter(self):
        if self.is_landlord:
            return Property.owner_id == self.identity_id
        leased = select(Tenant.property_id).where(
            Tenant.user_id == self.identity_id,
            Tenant.is_active.is_(True),
        )
        return Property.id.in_(leased)

    def tenant_filter(self):
        if self.is_landlord:
            return Property.owner_id == self.identity_id
        return Tenant.user_id == self.identity_id

    def transactions(self, db: Session, *entities):
        """Query over rent transactions visible to this scope.

        ``entities`` default to the RentTransaction entity; aggregate columns
        may be passed instead. Properties are inner-joined (every transaction
        has one) and tenants outer-joined (tenant_id is nullable).
        """
        query = (
            db.query(*(entities or (RentTransaction,)))
            .select_from(RentTransaction)
            .join(Property, RentTransaction.property_id == Property.id)
            .outerjoin(Tenant, RentTransaction.tenant_id == Tenant.id)
        )
        return query.filter(self.transaction_filter())

    def properties(self, db: Session, *entities):
        return db.query(*(entities or (Property,))).filter(self.property_filter())

    def tenants(self, db: Session, *entities):
        return (
            db.query(*(entities or (Tenant,)))
            .select_from(Tenant)
            .join(Property, Tenant.property_id == Property.id)
            .filter(self.tenant_filter())
        )


def resolve_scope(identity_id: Union[int, str, None], role: Union[UserRole, str, None]) -> AccessScope:
    if identity_id is None or identity_id == "":
        raise ScopeError("Missing identity")
    try:
        identity_id = int(identity_id)
    except (TypeError, ValueError):
        raise ScopeError(f"Invalid identity: {identity_id!r}")
    try:
        role = UserRole(role)
    except ValueError:
        raise ScopeError(f"Unknown role: {role!r}")
    return AccessScope(identity_id=identity_id, role=role)


def get_access_scope(user: Dict[str, Any] = Depends(get_current_user)) -> AccessScope:
    """FastAPI dependency resolving the caller's scope from the JWT claims."""
    try:
        return resolve_scope(user.get("sub"), user.get("role"))
    except ScopeError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
