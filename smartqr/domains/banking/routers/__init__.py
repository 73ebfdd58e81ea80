from .banks import router

__all__ = ["router"]
