"""Authorization request model and its validator."""

from .model import AuthorizationRequest, Child, Guardian, TimeWindow
from .validate import is_valid, validate

__all__ = [
    "AuthorizationRequest",
    "Child",
    "Guardian",
    "TimeWindow",
    "is_valid",
    "validate",
]
