"""Exceptions raised across the BrewBase core boundary.

Only create-time structured input errors (and, when enabled, slug
conflicts) escape the store. Not-found conditions are returned as ``None``.
"""


class BrewBaseError(Exception):
    """Base class for all BrewBase errors."""


class UnknownEntityError(BrewBaseError, ValueError):
    """Raised when an entity name is not one of the known collections."""

    def __init__(self, entity: str) -> None:
        self.entity = entity
        super().__init__(f"Unknown entity: {entity!r}")


class StructuredInputError(BrewBaseError, ValueError):
    """Raised when a nested field arrives as text that is not valid JSON.

    Args:
        field: The offending field name (e.g. 'variants').
        message: Parser error message.
    """

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        self.message = message
        super().__init__(f"Malformed structured value for '{field}': {message}")


class SlugConflictError(BrewBaseError):
    """Raised on create when slug uniqueness is enforced and the slug is taken."""

    def __init__(self, entity: str, slug: str) -> None:
        self.entity = entity
        self.slug = slug
        super().__init__(f"Slug '{slug}' already exists in '{entity}'")
