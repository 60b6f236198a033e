"""Domain-level exceptions.

Services raise these errors to express business rule violations.
Route handlers catch them and map to appropriate HTTP status codes.
"""


class DomainError(Exception):
    """Base class for all domain errors."""


class NotFoundError(DomainError):
    """Requested entity does not exist."""


class UserNotFoundError(NotFoundError):
    """No user with the given id."""

    def __init__(self, user_id: str):
        self.user_id = user_id
        super().__init__(f"User not found: {user_id}")


class DuplicateError(DomainError):
    """Entity with the same unique key already exists."""


class ValidationError(DomainError):
    """Input violates a business validation rule."""


class MissingContentError(ValidationError):
    """Publish request carries no HTML."""


class InvalidSlugError(ValidationError):
    """Slug does not satisfy the slug grammar."""

    def __init__(self, slug: str | None):
        self.slug = slug
        super().__init__(
            "Invalid site name. Use 3-63 characters, letters, numbers, and hyphens only."
        )


class InvalidUsernameError(ValidationError):
    """Username does not satisfy the username rules."""


class MalformedDocumentError(ValidationError):
    """HTML lacks the marker an optional asset is woven into."""

    def __init__(self, asset: str, marker: str):
        self.asset = asset
        self.marker = marker
        super().__init__(f"Cannot embed {asset}: document has no {marker}")


class SlugSpaceExhaustedError(DomainError):
    """No free suffixed slug within the allowed attempts."""


class SubdomainSpaceExhaustedError(DomainError):
    """No unused subdomain identity within the allowed attempts."""


class StorageError(DomainError):
    """Content or metadata store could not be read or written."""
