"""
Models for django-miniblog.

All models are importable from miniblog.models:

    from miniblog.models import Post, Category
"""
from .posts import SluggedModel, Category, Post

__all__ = [
    "SluggedModel",
    "Category",
    "Post",
]
