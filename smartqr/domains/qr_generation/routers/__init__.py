from .qr import router

__all__ = ["router"]
