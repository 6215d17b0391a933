"""
Ownership checks for post mutations.

Only the author of a post may update or delete it. Staff status is not
consulted here; it only unlocks the read-side dashboard.
"""
import logging

from .exceptions import OwnershipDenied, PostNotFound
from .models import Post

logger = logging.getLogger(__name__)

UPDATE = "update"
DELETE = "delete"


def requester_id(user):
    """Return the identity of ``user``, or None for anonymous requests."""
    if user is None or not user.is_authenticated:
        return None
    return user.pk


def is_owner(requester_id, author_id):
    """Check if the requester is the author. No identity is never an owner."""
    return requester_id is not None and requester_id == author_id


def check_ownership(user, obj, operation):
    """Raise OwnershipDenied unless ``user`` authored ``obj``."""
    user_id = requester_id(user)
    if is_owner(user_id, obj.author_id):
        return
    logger.warning(
        "Denied %s of %s %s to user %s",
        operation,
        obj._meta.model_name,
        obj.pk,
        user_id,
    )
    raise OwnershipDenied(f"You may not {operation} this {obj._meta.verbose_name}.")


def get_post_for_mutation(pk, user, operation):
    """
    Load a post that ``user`` is about to update or delete.

    Existence is checked before ownership, so a missing post is always
    reported as PostNotFound and never as OwnershipDenied. Call this before
    reading the request body.
    """
    try:
        post = Post.objects.get(pk=pk)
    except Post.DoesNotExist:
        raise PostNotFound("Post not found")
    check_ownership(user, post, operation)
    return post
