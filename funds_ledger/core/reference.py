"""Random reference tokens for transfer records."""

from __future__ import annotations

import secrets
import string
from typing import Callable

ALPHANUMERIC = string.ascii_letters + string.digits
DEFAULT_REFERENCE_LENGTH = 12

ReferenceGenerator = Callable[[], str]


def generate_reference(length: int = DEFAULT_REFERENCE_LENGTH, charset: str = ALPHANUMERIC) -> str:
    """Return a ``length`` character token drawn from ``charset`` with a CSPRNG."""
    if length <= 0:
        raise ValueError("reference length must be positive")
    if not charset:
        raise ValueError("reference charset must not be empty")
    return "".join(secrets.choice(charset) for _ in range(length))


def reference_generator(length: int = DEFAULT_REFERENCE_LENGTH, charset: str = ALPHANUMERIC) -> ReferenceGenerator:
    def _generate() -> str:
        return generate_reference(length, charset)

    return _generate


__all__ = [
    "ALPHANUMERIC",
    "DEFAULT_REFERENCE_LENGTH",
    "ReferenceGenerator",
    "generate_reference",
    "reference_generator",
]
