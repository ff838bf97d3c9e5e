# tests/conftest.py
import os

# must be set before storefront.utils.settings is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["CELERY_TASK_ALWAYS_EAGER"] = "true"
os.environ["JWT_SECRET_KEY"] = "test-secret"
os.environ["API_PREFIX"] = "/api"

from datetime import datetime, timezone
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from storefront.data.database import Base, SessionLocal, engine
from storefront.data.models import ProductModel, UserModel
from storefront.main import app
from storefront.services.credential_service import create_access_token
from storefront.utils import settings


@pytest.fixture(autouse=True)
def reset_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture(autouse=True)
def legacy_policies(monkeypatch):
    monkeypatch.setattr(settings, "STOCK_POLICY", "best_effort")
    monkeypatch.setattr(settings, "PRODUCT_LOCKS_ENABLED", False)
    monkeypatch.setattr(settings, "RESTORE_STOCK_ON_CANCEL", False)
    monkeypatch.setattr(settings, "STRICT_STATUS_TRANSITIONS", False)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def make_user(db):
    counter = {"n": 0}

    def _make(name="Alice", email=None, role="user", created_at=None):
        counter["n"] += 1
        user = UserModel(
            name=name,
            email=email or f"user{counter['n']}@example.com",
            role=role,
            created_at=created_at or datetime.now(timezone.utc),
        )
        db.add(user)
        db.commit()
        return user

    return _make


@pytest.fixture
def make_product(db):
    def _make(name="Twin Mill", price="100.00", stock=10, category="Classics", image="/img/p.jpg"):
        product = ProductModel(
            name=name,
            price=Decimal(price),
            stock=stock,
            category=category,
            image=image,
        )
        db.add(product)
        db.commit()
        return product

    return _make


@pytest.fixture
def auth():
    def _headers(user):
        return {"Authorization": f"Bearer {create_access_token(user.id, user.role)}"}

    return _headers


@pytest.fixture
def stock_of(db):
    def _stock(product_id):
        db.expire_all()
        return db.get(ProductModel, product_id).stock

    return _stock


class RecordingNotifications:
    def __init__(self):
        self.placed = []
        self.status_changes = []

    def send_order_placed(self, user_id, order_id, total_amount):
        self.placed.append((user_id, order_id, total_amount))

    def send_status_changed(self, user_id, order_id, status):
        self.status_changes.append((user_id, order_id, status))


@pytest.fixture
def notifications():
    return RecordingNotifications()
