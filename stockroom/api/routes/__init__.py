"""API route modules."""

from stockroom.api.routes.activities import router as activities_router
from stockroom.api.routes.fixed_prices import router as fixed_prices_router
from stockroom.api.routes.health import router as health_router
from stockroom.api.routes.items import router as items_router
from stockroom.api.routes.purchase_orders import router as purchase_orders_router
from stockroom.api.routes.reports import router as reports_router
from stockroom.api.routes.work_orders import router as work_orders_router

__all__ = [
    "health_router",
    "items_router",
    "work_orders_router",
    "purchase_orders_router",
    "reports_router",
    "fixed_prices_router",
    "activities_router",
]
