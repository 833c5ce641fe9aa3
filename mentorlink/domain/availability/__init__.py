from .router import mentor_availability_router, router

__all__ = ["mentor_availability_router", "router"]
