from .router import router, store_router

__all__ = ["router", "store_router"]
