"""API router configuration."""

from fastapi import APIRouter

from .routes.products import router as products_router

api_router = APIRouter(prefix="/api")

api_router.include_router(products_router)
