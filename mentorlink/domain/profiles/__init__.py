from .router import auth_router, mentors_router, router

__all__ = ["auth_router", "mentors_router", "router"]
