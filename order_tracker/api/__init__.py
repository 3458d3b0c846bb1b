from fastapi import APIRouter
from .customers import router as customers_router
from .orders import router as orders_router
from .products import router as products_router
from .statuses import router as statuses_router

def build_api_router(*extra: APIRouter) -> APIRouter:
    """Everything the clients call, mounted under ``/api``."""
    router = APIRouter(prefix="/api")
    for sub in (products_router, customers_router, orders_router, statuses_router, *extra):
        router.include_router(sub)
    return router
