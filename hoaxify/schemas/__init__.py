"""Schema 模块"""

from .response import ErrorResponse, MessageResponse
from .user import (
    AuthRequest,
    UserCreate,
    UserPage,
    UserResponse,
    UserSummary,
    UserUpdate,
)

__all__ = [
    "AuthRequest",
    "ErrorResponse",
    "MessageResponse",
    "UserCreate",
    "UserPage",
    "UserResponse",
    "UserSummary",
    "UserUpdate",
]
