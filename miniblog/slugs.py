"""
Unique slug assignment.

The slug column carries a unique constraint; that constraint is what keeps
slugs unique when two writers race. The scan below only picks a candidate
that is probably free, so most writes succeed on the first attempt:

    save_with_unique_slug(post, post.title, super().save)

Each attempt saves inside a savepoint. A unique violation on the slug rolls
back the savepoint and the next counter is tried, up to SLUG_MAX_ATTEMPTS.
"""
import logging

from django.db import IntegrityError, transaction
from django.utils.crypto import get_random_string

from .conf import blog_settings
from .exceptions import SlugConflictExhausted
from .text import base_slug, is_numeric_slug

logger = logging.getLogger(__name__)

SLUG_CHARS = "abcdefghijklmnopqrstuvwxyz0123456789"


def resolve_base_slug(model, text):
    """
    Return the base slug for ``text`` within ``model``'s table.

    Titles without usable characters get a random slug, and purely numeric
    slugs are prefixed with the model name so they never look like an id.
    """
    prefix = model._meta.model_name
    # Leave room for the "-<counter>" suffix
    max_length = blog_settings.SLUG_MAX_LENGTH - len(str(blog_settings.SLUG_MAX_ATTEMPTS)) - 1

    # Fallbacks are applied after truncation, which can drop the only letters
    slug = base_slug(text)[:max_length].rstrip("-")
    if not slug:
        slug = f"{prefix}-{get_random_string(blog_settings.SLUG_FALLBACK_LENGTH, SLUG_CHARS)}"
    elif is_numeric_slug(slug):
        slug = f"{prefix}-{slug}"
    return slug[:max_length].rstrip("-")


def candidate(base, counter):
    """Return the slug tried at position ``counter``: base, base-1, base-2, ..."""
    if counter == 0:
        return base
    return f"{base}-{counter}"


def taken_slugs(model, base, exclude_pk=None):
    """Return the stored slugs that could collide with candidates for ``base``."""
    qs = model._default_manager.filter(slug__startswith=base)
    if exclude_pk is not None:
        qs = qs.exclude(pk=exclude_pk)
    return set(qs.values_list("slug", flat=True))


def next_free(base, taken, start=0):
    """
    Return ``(counter, slug)`` for the first candidate not in ``taken``.

    Raises SlugConflictExhausted once SLUG_MAX_ATTEMPTS candidates are used up.
    """
    max_attempts = blog_settings.SLUG_MAX_ATTEMPTS
    for counter in range(start, max_attempts):
        slug = candidate(base, counter)
        if slug not in taken:
            return counter, slug
    raise SlugConflictExhausted(base, max_attempts)


def slug_in_use(model, slug, exclude_pk=None):
    qs = model._default_manager.filter(slug=slug)
    if exclude_pk is not None:
        qs = qs.exclude(pk=exclude_pk)
    return qs.exists()


def assign_slug(model, text, exclude_pk=None):
    """
    Return the first free slug for ``text`` in ``model``'s table.

    Pass ``exclude_pk`` when re-slugging an existing record so it does not
    collide with its own current slug. The result is only a candidate: use
    save_with_unique_slug to store it safely.
    """
    base = resolve_base_slug(model, text)
    _, slug = next_free(base, taken_slugs(model, base, exclude_pk))
    return slug


def save_with_unique_slug(instance, text, save, *args, **kwargs):
    """
    Assign a unique slug derived from ``text`` to ``instance`` and save it.

    Args:
        instance: model instance with a unique ``slug`` field
        text: title or name the slug is derived from
        save: callable performing the actual save, e.g. ``super().save``
        *args, **kwargs: passed through to ``save``

    Returns:
        The saved instance.
    """
    model = type(instance)
    base = resolve_base_slug(model, text)
    max_attempts = blog_settings.SLUG_MAX_ATTEMPTS
    counter = 0

    for _ in range(max_attempts):
        counter, slug = next_free(base, taken_slugs(model, base, instance.pk), counter)
        instance.slug = slug
        try:
            with transaction.atomic():
                save(*args, **kwargs)
        except IntegrityError:
            # Some other constraint failed
            if not slug_in_use(model, slug, instance.pk):
                raise
            logger.warning(
                "Slug %r for %s was taken by a concurrent write, retrying",
                slug,
                model._meta.model_name,
            )
            counter += 1
        else:
            return instance

    raise SlugConflictExhausted(base, max_attempts)
