"""Identity domain specific exceptions."""


class IdentityError(Exception):
    """Base class for identity domain errors."""


class IdentityAlreadyExistsError(IdentityError):
    """Raised when attempting to create an identity with a duplicate username."""


class IdentityNotFoundError(IdentityError):
    """Raised when the requested identity cannot be found."""
