"""Use cases for authenticating and registering users."""

from .authenticate_user import AuthenticationStatus, authenticate_user
from .create_user import create_user

__all__ = [
    "AuthenticationStatus",
    "authenticate_user",
    "create_user",
]
