# storefront/data/seed.py
from decimal import Decimal

from storefront.data.database import SessionLocal
from storefront.data.models import ProductModel, UserModel
from storefront.services.credential_service import create_access_token
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

SAMPLE_PRODUCTS = [
    {"name": "Twin Mill", "price": Decimal("349.00"), "stock": 25, "category": "Classics", "image": "/img/twin-mill.jpg"},
    {"name": "Bone Shaker", "price": Decimal("499.00"), "stock": 15, "category": "Classics", "image": "/img/bone-shaker.jpg"},
    {"name": "Deora II", "price": Decimal("799.00"), "stock": 10, "category": "Premium", "image": "/img/deora-ii.jpg"},
    {"name": "Rodger Dodger", "price": Decimal("1299.00"), "stock": 5, "category": "Premium", "image": "/img/rodger-dodger.jpg"},
]

SAMPLE_USERS = [
    {"name": "Store Admin", "email": "admin@example.com", "role": "admin"},
    {"name": "Demo User", "email": "demo@example.com", "role": "user"},
]


def seed(db=None) -> dict:
    """
    Inserts sample users and products when the tables are empty.
    Returns bearer tokens for the seeded users, keyed by email.
    """
    own_session = db is None
    db = db or SessionLocal()
    try:
        tokens = {}
        # not forcing: only seed if empty
        if db.query(UserModel).first() is None:
            for u in SAMPLE_USERS:
                db.add(UserModel(**u))
        if db.query(ProductModel).first() is None:
            for p in SAMPLE_PRODUCTS:
                db.add(ProductModel(**p))
        db.commit()

        for user in db.query(UserModel).filter(UserModel.email.in_([u["email"] for u in SAMPLE_USERS])):
            tokens[user.email] = create_access_token(user.id, user.role)
        return tokens
    finally:
        if own_session:
            db.close()


if __name__ == "__main__":
    from storefront.main import init_db

    init_db()
    for email, token in seed().items():
        logger.info(f"{email}: {token}")
