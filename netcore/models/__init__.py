"""Domain models decoded from API responses."""

from .base import WireModel
from .user import Activity, User

__all__ = ["Activity", "User", "WireModel"]
