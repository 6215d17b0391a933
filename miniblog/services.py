"""
Write operations for posts and categories.

Callers are expected to have authorized the request already (see
miniblog.permissions) and validated the payload (see miniblog.forms).
"""
import logging

from django.core.exceptions import ValidationError

from . import uploads
from .exceptions import StorageUnavailable
from .models import Category, Post

logger = logging.getLogger(__name__)


def create_post(author, data):
    """Create a post for ``author`` from validated form data."""
    post = Post(
        author=author,
        title=data["title"],
        content=data["content"],
        excerpt=data.get("excerpt") or "",
        published=data.get("published", False),
        cover_image=data.get("cover_image") or "",
        category=data.get("category"),
    )
    post.save()
    logger.info("Created post %s (%s) by user %s", post.pk, post.slug, author.pk)
    return post


def update_post(post, data):
    """
    Apply validated changes to an existing post.

    The slug is re-derived only when the title changes. A missing excerpt is
    regenerated from the new content.
    """
    if data["title"] != post.title:
        post.slug = ""

    post.title = data["title"]
    post.content = data["content"]
    post.excerpt = data.get("excerpt") or ""
    post.published = data.get("published", False)
    if "cover_image" in data:
        post.cover_image = data["cover_image"] or ""
    if "category" in data:
        post.category = data["category"]

    post.save()
    logger.info("Updated post %s (%s)", post.pk, post.slug)
    return post


def delete_post(post):
    """
    Delete a post, then remove its cover image.

    Removing the image is best effort: a failure is logged and the deletion
    still succeeds. An image still referenced by another post is kept.
    """
    deleted = {"id": post.pk, "title": post.title}
    cover_image = post.cover_image

    post.delete()
    logger.info("Deleted post %s", deleted["id"])

    if cover_image and Post.objects.filter(cover_image=cover_image).exists():
        logger.info(
            "Kept cover image %s of post %s, other posts still use it",
            cover_image,
            deleted["id"],
        )
    elif cover_image:
        try:
            if not uploads.delete_cover_image(cover_image):
                logger.warning("Cover image %s of post %s was already gone", cover_image, deleted["id"])
        except (StorageUnavailable, ValidationError):
            logger.warning(
                "Failed to delete cover image %s of post %s",
                cover_image,
                deleted["id"],
                exc_info=True,
            )

    return deleted


def create_category(data):
    """Create a category from validated form data."""
    category = Category(
        name=data["name"],
        description=data.get("description") or "",
        color=data.get("color") or "",
    )
    category.save()
    logger.info("Created category %s (%s)", category.pk, category.slug)
    return category
