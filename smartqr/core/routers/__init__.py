from .exception_handlers import setup_exception_handlers
from .monitoring import router as monitoring_router

__all__ = [
    "setup_exception_handlers",
    "monitoring_router",
]
