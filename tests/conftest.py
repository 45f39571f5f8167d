"""
Pytest configuration: point the app at a throwaway SQLite database and mint
Supabase-style JWTs locally.
"""
import os
import tempfile
import uuid
from datetime import datetime, timedelta, timezone

_db_dir = tempfile.mkdtemp(prefix="storefront-tests-")

# Settings are read at import time, so the environment must be ready first
os.environ["SUPABASE_URL"] = "http://localhost:54321"
os.environ["SUPABASE_KEY"] = "test-anon-key"
os.environ["SUPABASE_SERVICE_ROLE_KEY"] = "test-service-role-key"
os.environ["SUPABASE_JWT_SECRET"] = "test-jwt-secret"
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_db_dir, 'test.db')}"
os.environ["ANALYTICS_TIMEZONE"] = "UTC"

import pytest
from fastapi.testclient import TestClient
from jose import jwt
from sqlmodel import Session, SQLModel

from app.database import engine
from app.main import app
from app.models.order import Order, OrderItem
from app.models.seller import Seller

JWT_SECRET = os.environ["SUPABASE_JWT_SECRET"]


def _make_token(seller_id: uuid.UUID, email: str, expires_in: int = 3600) -> str:
    now = datetime.now(timezone.utc)
    claims = {
        "sub": str(seller_id),
        "email": email,
        "aud": "authenticated",
        "iat": int(now.timestamp()),
        "exp": int((now + timedelta(seconds=expires_in)).timestamp()),
    }
    return jwt.encode(claims, JWT_SECRET, algorithm="HS256")


@pytest.fixture(autouse=True)
def reset_database():
    SQLModel.metadata.drop_all(engine)
    SQLModel.metadata.create_all(engine)
    yield


@pytest.fixture
def db_session():
    with Session(engine) as session:
        yield session


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture
def seller_id() -> uuid.UUID:
    return uuid.uuid4()


@pytest.fixture
def make_token():
    return _make_token


@pytest.fixture
def auth_headers(seller_id):
    return {"Authorization": f"Bearer {_make_token(seller_id, 'shop@example.com')}"}


@pytest.fixture
def seller(db_session, seller_id) -> Seller:
    """A seller with a completed profile."""
    seller = Seller(
        id=seller_id,
        email="shop@example.com",
        store_name="Corner Bakery",
        store_location="Pune",
        phone_number="+91 98765 43210",
    )
    db_session.add(seller)
    db_session.commit()
    db_session.refresh(seller)
    return seller


@pytest.fixture
def other_seller(db_session) -> Seller:
    seller = Seller(
        id=uuid.uuid4(),
        email="rival@example.com",
        store_name="Rival Store",
        store_location="Mumbai",
        phone_number="+91 90000 00000",
    )
    db_session.add(seller)
    db_session.commit()
    db_session.refresh(seller)
    return seller


@pytest.fixture
def add_order(db_session):
    """Insert an order (and optional line items) as the storefront would."""

    def _add(
        seller_id: uuid.UUID,
        created_at: datetime,
        total_amount: float,
        status: str = "active",
        items: list[tuple[str, int, float]] | None = None,
    ) -> Order:
        order = Order(
            seller_id=seller_id,
            customer_name="Asha",
            customer_email="asha@example.com",
            total_amount=total_amount,
            status=status,
            created_at=created_at,
            updated_at=created_at,
        )
        db_session.add(order)
        db_session.flush()
        for position, (name, quantity, price) in enumerate(items or []):
            db_session.add(
                OrderItem(
                    order_id=order.id,
                    product_id=uuid.uuid4(),
                    name=name,
                    quantity=quantity,
                    price=price,
                    position=position,
                )
            )
        db_session.commit()
        db_session.refresh(order)
        return order

    return _add
