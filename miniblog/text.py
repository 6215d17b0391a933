"""
Pure text helpers: base slugs and excerpts.
"""
import re

from .conf import blog_settings

DISALLOWED_CHARS = re.compile(r"[^a-z0-9\s-]")
WHITESPACE_RUN = re.compile(r"\s+")
HYPHEN_RUN = re.compile(r"-+")
TAG = re.compile(r"<[^>]*>")
NUMERIC_SLUG = re.compile(r"^[0-9-]+$")


def base_slug(text):
    """
    Derive the slug candidate for a title or name.

    Lowercases, drops everything except ASCII letters, digits, whitespace and
    hyphens, turns whitespace into hyphens and collapses repeated hyphens.
    May return an empty string.
    """
    slug = DISALLOWED_CHARS.sub("", (text or "").lower())
    slug = WHITESPACE_RUN.sub("-", slug)
    slug = HYPHEN_RUN.sub("-", slug)
    return slug.strip("- \t\r\n")


def is_numeric_slug(slug):
    """Check if a slug has no letters, so it would read as an id."""
    return bool(NUMERIC_SLUG.match(slug))


def derive_excerpt(content):
    """
    Return a plain-text summary of ``content``.

    Tags are stripped, the text is cut to EXCERPT_LENGTH characters, trimmed,
    and EXCERPT_SUFFIX is appended.
    """
    plain = TAG.sub("", content or "")
    return plain[:blog_settings.EXCERPT_LENGTH].strip() + blog_settings.EXCERPT_SUFFIX
