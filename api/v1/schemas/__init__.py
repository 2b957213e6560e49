"""Re-export individual schema modules for easy imports."""

from .user import UserCreate, UserOut
from .auth import LoginIn, LoginOut

__all__ = [
    "UserCreate",
    "UserOut",
    "LoginIn",
    "LoginOut",
]
