import os
import tempfile
from datetime import date
from decimal import Decimal

# Must be set before any application module reads config
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("ENABLE_SCHEDULER", "false")
os.environ.setdefault("LOG_DIR", os.path.join(tempfile.gettempdir(), "rent-manager-test-logs"))

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from database import Base, get_db
from main import app
from models import Property, RentTransaction, Tenant, User, UserRole, TransactionStatus, PaymentMode
from utils.auth_utils import create_access_token
from utils.scope import AccessScope

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session():
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db_session):
    def override_get_db():
        db = TestingSessionLocal()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


def make_user(db, email, role=UserRole.LANDLORD, name=None):
    user = User(name=name or email.split("@")[0], email=email, hashed_password="not-a-real-hash", role=role.value)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def make_property(db, owner, rent_amount="15000", name="Sunrise Apartments", is_active=True):
    prop = Property(owner_id=owner.id, name=name, rent_amount=Decimal(rent_amount), is_active=is_active)
    db.add(prop)
    db.commit()
    db.refresh(prop)
    return prop


def make_tenant(db, prop, user=None, name="Ravi", is_active=True):
    tenant = Tenant(property_id=prop.id, user_id=user.id if user else None, name=name, is_active=is_active)
    db.add(tenant)
    db.commit()
    db.refresh(tenant)
    return tenant


def make_transaction(db, prop, tenant=None, amount="1000", due_date=date(2024, 3, 5),
                     status=TransactionStatus.PENDING, mode=PaymentMode.CASH, date_paid=None, billing_period=None):
    transaction = RentTransaction(
        property_id=prop.id,
        tenant_id=tenant.id if tenant else None,
        amount=Decimal(amount),
        due_date=due_date,
        date_paid=date_paid,
        status=status,
        mode=mode,
        billing_period=billing_period,
        created_by=prop.owner_id,
    )
    db.add(transaction)
    db.commit()
    db.refresh(transaction)
    return transaction


def auth_headers(user):
    token = create_access_token({"sub": str(user.id), "name": user.name, "email": user.email, "role": user.role})
    return {"Authorization": f"Bearer {token}"}


def scope_for(user):
    return AccessScope(identity_id=user.id, role=UserRole(user.role))


@pytest.fixture
def session_factory(db_session):
    return TestingSessionLocal
