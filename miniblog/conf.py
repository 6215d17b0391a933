"""
Configuration settings for django-miniblog.

Override these in your Django settings.py:

    MINIBLOG = {
        'SLUG_MAX_LENGTH': 100,
        'SLUG_MAX_ATTEMPTS': 100,
        'COVER_MAX_SIZE_MB': 5,
        ...
    }
"""
from django.conf import settings

DEFAULTS = {
    # Slugs
    "SLUG_MAX_LENGTH": 100,
    "SLUG_MAX_ATTEMPTS": 100,  # upper bound on collision retries per write
    "SLUG_FALLBACK_LENGTH": 8,  # random part of slugs for titles with no usable characters

    # Posts
    "TITLE_MAX_LENGTH": 200,
    "EXCERPT_LENGTH": 160,
    "EXCERPT_SUFFIX": "...",
    "POSTS_PER_PAGE": 10,
    "MAX_PAGE_SIZE": 100,

    # Cover images
    "COVER_UPLOAD_PATH": "uploads/",
    "COVER_MAX_SIZE_MB": 5,
    "ALLOWED_IMAGE_TYPES": ["image/jpeg", "image/png", "image/webp"],
}


class MiniblogSettings:
    """
    Lazy settings object that reads from Django settings.

    Access via: from miniblog.conf import blog_settings
    """

    def __getattr__(self, name):
        if name not in DEFAULTS:
            raise AttributeError(f"Invalid miniblog setting: {name}")

        user_settings = getattr(settings, "MINIBLOG", {})
        return user_settings.get(name, DEFAULTS[name])

    @property
    def COVER_MAX_SIZE(self):
        """Return the maximum cover image size in bytes."""
        return self.COVER_MAX_SIZE_MB * 1024 * 1024


blog_settings = MiniblogSettings()
