"""Infrastructure services backed by third-party security libraries."""

from .password_hasher import BcryptPasswordHasher
from .token_service import TokenService

__all__ = ["BcryptPasswordHasher", "TokenService"]
