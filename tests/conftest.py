"""
Shared fixtures for django-miniblog tests.
"""
import io

import pytest
from django.contrib.auth import get_user_model
from django.core.files.uploadedfile import SimpleUploadedFile
from django.test import Client
from PIL import Image

from miniblog.models import Category, Post

User = get_user_model()


@pytest.fixture(autouse=True)
def media_root(settings, tmp_path):
    """Store uploads in a temporary directory."""
    settings.MEDIA_ROOT = str(tmp_path / "media")
    return tmp_path / "media"


@pytest.fixture
def user(db):
    """Create a test user."""
    return User.objects.create_user(
        username="testuser",
        email="test@example.com",
        password="testpass123",
    )


@pytest.fixture
def other_user(db):
    """Create a second user who does not own the test post."""
    return User.objects.create_user(
        username="other",
        email="other@example.com",
        password="pass",
    )


@pytest.fixture
def staff_user(db):
    return User.objects.create_user(
        username="admin",
        email="admin@example.com",
        password="pass",
        is_staff=True,
    )


@pytest.fixture
def category(db):
    """Create a test category."""
    return Category.objects.create(name="Test Category")


@pytest.fixture
def post(db, user, category):
    """Create a published test post."""
    return Post.objects.create(
        title="Test Post",
        content="This is a test post body.",
        author=user,
        category=category,
        published=True,
    )


@pytest.fixture
def author_client(user):
    client = Client()
    client.force_login(user)
    return client


@pytest.fixture
def other_client(other_user):
    client = Client()
    client.force_login(other_user)
    return client


def make_image(size=(4, 3), fmt="PNG"):
    """Return the bytes of a small solid-color image."""
    buffer = io.BytesIO()
    Image.new("RGB", size, "red").save(buffer, format=fmt)
    return buffer.getvalue()


@pytest.fixture
def png_upload():
    """An uploaded 4x3 PNG file."""
    return SimpleUploadedFile("cover.png", make_image(), content_type="image/png")
