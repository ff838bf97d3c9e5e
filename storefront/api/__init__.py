# storefront/api/__init__.py
from fastapi import APIRouter

from storefront.api.routers import admin, carts, health, orders, products

api_router = APIRouter()
api_router.include_router(health.router)
api_router.include_router(orders.router)
api_router.include_router(carts.router)
api_router.include_router(products.router)
api_router.include_router(admin.router)
