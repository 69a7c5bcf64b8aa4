"""Domain exceptions.

These are raised by repositories and token handling. Service operations catch
them at their boundary and report a Result instead.
"""


class PodcasterError(Exception):
    """Base class for all application specific errors."""


class EntityNotFoundError(PodcasterError):
    """Raised by ``find_one_or_fail`` and by saves of unknown entity ids."""

    def __init__(self, entity_name: str, criteria: dict) -> None:
        self.entity_name = entity_name
        self.criteria = criteria
        super().__init__(f"{entity_name} matching {criteria!r} not found")


class InvalidTokenError(PodcasterError):
    """Raised when a session token is malformed, tampered with or expired."""
