"""API routers package."""

from ledgerfolio.api.routers.portfolios import router as portfolios_router
from ledgerfolio.api.routers.assets import router as assets_router
from ledgerfolio.api.routers.records import router as records_router
from ledgerfolio.api.routers.views import router as views_router
from ledgerfolio.api.routers.tools import router as tools_router

__all__ = [
    "portfolios_router",
    "assets_router",
    "records_router",
    "views_router",
    "tools_router",
]
