"""
Exceptions raised by miniblog.

Not-found and forbidden conditions subclass the Django exceptions with the
same meaning, so they also behave correctly outside the JSON views.
"""
from django.core.exceptions import PermissionDenied
from django.http import Http404


class BlogError(Exception):
    """Base class for miniblog failures that are not Django built-ins."""

    code = "error"


class NotAuthenticated(PermissionDenied):
    """The request carries no identity."""

    code = "unauthorized"


class PostNotFound(Http404):
    """The referenced post does not exist."""

    code = "not_found"


class OwnershipDenied(PermissionDenied):
    """The requester is not the author of the resource."""

    code = "forbidden"


class SlugConflictExhausted(BlogError):
    """No free slug could be stored within the configured number of attempts."""

    code = "slug_conflict"

    def __init__(self, base_slug, attempts):
        self.base_slug = base_slug
        self.attempts = attempts
        super().__init__(
            f"Could not allocate a unique slug for '{base_slug}' after {attempts} attempts"
        )


class StorageUnavailable(BlogError):
    """The file store failed to save or remove a file."""

    code = "upstream_error"
