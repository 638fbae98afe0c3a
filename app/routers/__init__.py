from . import auth, health, teachers

__all__ = [
    "auth",
    "health",
    "teachers",
]
