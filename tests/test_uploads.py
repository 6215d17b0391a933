"""
Tests for cover image uploads.
"""
import pytest
from django.core.exceptions import ValidationError
from django.core.files.uploadedfile import SimpleUploadedFile

from miniblog import uploads

from .conftest import make_image

UPLOAD_URL = "/blog/uploads/"


class TestStoreCoverImage:
    def test_store(self, png_upload, media_root):
        result = uploads.store_cover_image(png_upload)

        assert result["url"] == f"/media/uploads/{result['file_name']}"
        assert result["file_name"].endswith(".png")
        assert result["type"] == "image/png"
        assert (result["width"], result["height"]) == (4, 3)
        assert (media_root / "uploads" / result["file_name"]).exists()

    def test_rejects_type(self):
        upload = SimpleUploadedFile("notes.txt", b"hello", content_type="text/plain")
        with pytest.raises(ValidationError) as excinfo:
            uploads.store_cover_image(upload)
        assert "Invalid file type" in excinfo.value.message_dict["file"][0]

    def test_rejects_size(self, settings, png_upload):
        settings.MINIBLOG = {"COVER_MAX_SIZE_MB": 0}
        with pytest.raises(ValidationError) as excinfo:
            uploads.store_cover_image(png_upload)
        assert excinfo.value.message_dict["file"] == ["File size too large. Maximum size: 0MB"]

    def test_rejects_unreadable_image(self):
        upload = SimpleUploadedFile("fake.png", b"not an image", content_type="image/png")
        with pytest.raises(ValidationError) as excinfo:
            uploads.store_cover_image(upload)
        assert excinfo.value.message_dict["file"] == ["File is not a valid image"]

    def test_unique_file_names(self):
        assert uploads.generate_file_name("PNG") != uploads.generate_file_name("PNG")
        assert uploads.generate_file_name("JPEG").endswith(".jpg")

    def test_extension_follows_detected_format(self, media_root):
        upload = SimpleUploadedFile("page.html", make_image(), content_type="image/png")

        result = uploads.store_cover_image(upload)

        assert result["file_name"].endswith(".png")
        assert (media_root / "uploads" / result["file_name"]).exists()

    def test_rejects_format_outside_allowed_set(self):
        upload = SimpleUploadedFile("anim.png", make_image(fmt="GIF"), content_type="image/png")
        with pytest.raises(ValidationError) as excinfo:
            uploads.store_cover_image(upload)
        assert excinfo.value.message_dict["file"] == ["Unsupported image format: GIF"]


class TestDeleteUpload:
    def test_delete(self, png_upload, media_root):
        result = uploads.store_cover_image(png_upload)

        assert uploads.delete_upload(result["file_name"])
        assert not (media_root / "uploads" / result["file_name"]).exists()

    def test_missing_file(self, media_root):
        assert not uploads.delete_upload("missing.png")

    @pytest.mark.parametrize("name", ["", "..", "../settings.py", "a/b.png", "a\\b.png"])
    def test_rejects_unsafe_names(self, name):
        with pytest.raises(ValidationError):
            uploads.delete_upload(name)

    def test_delete_cover_image_by_url(self, png_upload):
        result = uploads.store_cover_image(png_upload)
        assert uploads.delete_cover_image(result["url"])


class TestUploadView:
    def test_requires_login(self, client, db, png_upload):
        response = client.post(UPLOAD_URL, {"file": png_upload})
        assert response.status_code == 401

    def test_upload(self, author_client, png_upload):
        response = author_client.post(UPLOAD_URL, {"file": png_upload})

        assert response.status_code == 201
        assert response.json()["url"].startswith("/media/uploads/")

    def test_no_file(self, author_client):
        response = author_client.post(UPLOAD_URL, {})
        assert response.status_code == 400
        assert response.json()["details"] == {"file": ["No file provided"]}

    def test_delete(self, author_client, png_upload):
        file_name = author_client.post(UPLOAD_URL, {"file": png_upload}).json()["file_name"]

        response = author_client.delete(f"{UPLOAD_URL}?file_name={file_name}")

        assert response.status_code == 200
        assert author_client.delete(f"{UPLOAD_URL}?file_name={file_name}").status_code == 404

    def test_delete_requires_name(self, author_client):
        assert author_client.delete(UPLOAD_URL).status_code == 400
