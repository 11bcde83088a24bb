from .health import router as health_router
from .plans import router as plans_router
from .risk import router as risk_router

__all__ = [
    "health_router",
    "plans_router",
    "risk_router",
]
