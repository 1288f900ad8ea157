"""
Error types raised by the dog service.

The taxonomy is flat: every failure is one of three kinds, all sharing
the ``DogError`` base so the HTTP layer can translate them in one
place.

* ``DogNotFoundError``: no row matches the given id (maps to 404).
* ``DogValidationError``: caller supplied data breaks a rule (400).
* ``DogServiceError``: storage failures and anything unexpected (500).
  The original exception is chained as ``__cause__``.
"""


class DogError(Exception):
    """Base class for dog service failures."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class DogNotFoundError(DogError):
    """Raised when no dog record exists for ``dog_id``."""

    def __init__(self, dog_id: int, message: str | None = None) -> None:
        super().__init__(message or f"Dog with ID {dog_id} not found")
        self.dog_id = dog_id


class DogValidationError(DogError):
    """Raised when a draft or patch violates a roster rule."""


class DogServiceError(DogError):
    """Raised on storage errors and unclassified failures."""
