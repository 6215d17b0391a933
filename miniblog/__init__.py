"""
django-miniblog - A small Django blogging app.

Features:
- Unique, human-readable slugs that survive concurrent writers
- Owner-only editing and deletion of posts
- Auto-generated excerpts
- Categories with colors
- Cover image uploads through Django's storage API
- JSON API for posts, categories and uploads
"""

__version__ = "0.1.0"
