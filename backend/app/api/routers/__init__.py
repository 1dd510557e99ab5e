"""Router exports for FastAPI composition."""

from . import frontend, health, passwords

__all__ = ["frontend", "health", "passwords"]
