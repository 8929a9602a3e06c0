"""Identity domain models and errors."""

from .models import Identity
from .exceptions import (
    IdentityError,
    IdentityAlreadyExistsError,
    IdentityNotFoundError,
)

__all__ = [
    "Identity",
    "IdentityError",
    "IdentityAlreadyExistsError",
    "IdentityNotFoundError",
]
