"""
Cover image uploads.

Files go through Django's default storage under COVER_UPLOAD_PATH and are
referenced from posts by their public URL.
"""
import logging
import posixpath
import time
from urllib.parse import urlparse

from django.core.exceptions import ValidationError
from django.core.files.storage import default_storage
from django.utils.crypto import get_random_string
from PIL import Image

from .conf import blog_settings
from .exceptions import StorageUnavailable
from .slugs import SLUG_CHARS

logger = logging.getLogger(__name__)

FORMAT_EXTENSIONS = {
    "JPEG": ".jpg",
    "PNG": ".png",
    "WEBP": ".webp",
}


def generate_file_name(image_format):
    """Return a unique file name with the extension of the detected image format."""
    return f"{int(time.time() * 1000)}-{get_random_string(6, SLUG_CHARS)}{FORMAT_EXTENSIONS[image_format]}"


def storage_name(file_name):
    return blog_settings.COVER_UPLOAD_PATH + file_name


def validate_cover_image(file_obj):
    """
    Check type, size and readability of an uploaded cover image.

    Returns:
        (width, height, format) of the image, format as detected by Pillow
    """
    allowed = blog_settings.ALLOWED_IMAGE_TYPES
    content_type = getattr(file_obj, "content_type", "")
    if content_type not in allowed:
        raise ValidationError(
            {"file": f"Invalid file type. Allowed types: {', '.join(allowed)}"}
        )

    if file_obj.size > blog_settings.COVER_MAX_SIZE:
        raise ValidationError(
            {"file": f"File size too large. Maximum size: {blog_settings.COVER_MAX_SIZE_MB}MB"}
        )

    try:
        with Image.open(file_obj) as img:
            width, height = img.size
            image_format = img.format
            img.verify()
    except (OSError, SyntaxError, ValueError):
        raise ValidationError({"file": "File is not a valid image"})
    finally:
        file_obj.seek(0)

    if image_format not in FORMAT_EXTENSIONS:
        raise ValidationError({"file": f"Unsupported image format: {image_format}"})

    return width, height, image_format


def store_cover_image(file_obj):
    """
    Validate and store an uploaded cover image.

    Args:
        file_obj: Django UploadedFile

    Returns:
        dict with the public ``url`` to store on the post, plus file details
    """
    width, height, image_format = validate_cover_image(file_obj)

    try:
        name = default_storage.save(storage_name(generate_file_name(image_format)), file_obj)
    except OSError as exc:
        raise StorageUnavailable("Failed to upload file") from exc

    logger.info("Stored cover image %s (%d bytes)", name, file_obj.size)
    return {
        "url": default_storage.url(name),
        "file_name": posixpath.basename(name),
        "size": file_obj.size,
        "type": file_obj.content_type,
        "width": width,
        "height": height,
    }


def delete_upload(file_name):
    """
    Remove a stored upload by file name.

    Returns:
        True if the file existed and was removed, False if it was not found
    """
    if (
        not file_name
        or file_name in (".", "..")
        or posixpath.basename(file_name) != file_name
        or "\\" in file_name
    ):
        raise ValidationError({"file_name": "Invalid file name"})

    name = storage_name(file_name)
    try:
        if not default_storage.exists(name):
            return False
        default_storage.delete(name)
    except OSError as exc:
        raise StorageUnavailable(f"Failed to delete file {file_name}") from exc

    logger.info("Deleted upload %s", name)
    return True


def delete_cover_image(reference):
    """Remove the file behind a post's ``cover_image`` reference."""
    return delete_upload(posixpath.basename(urlparse(reference).path))
