"""
Forms validating JSON payloads for posts and categories.
"""
import json

from django import forms
from django.core.exceptions import ValidationError

from .conf import blog_settings
from .models import Category


def parse_json_body(request):
    """Decode a JSON object from the request body."""
    try:
        payload = json.loads(request.body or b"{}")
    except (TypeError, ValueError):
        raise ValidationError("Request body must be valid JSON.", code="invalid_json")
    if not isinstance(payload, dict):
        raise ValidationError("Request body must be a JSON object.", code="invalid_json")
    return payload


def validate(form):
    """Return the form's cleaned data or raise ValidationError with field errors."""
    if not form.is_valid():
        raise ValidationError(form.errors.as_data())
    return form.cleaned_data


class PostForm(forms.Form):
    """Payload for creating or updating a post."""

    # Left untouched on update when absent from the payload
    KEEP_WHEN_ABSENT = ("cover_image", "category")

    title = forms.CharField(
        max_length=blog_settings.TITLE_MAX_LENGTH,
        error_messages={
            "required": "Title is required",
            "max_length": "Title too long",
        },
    )
    content = forms.CharField(
        strip=False,
        error_messages={"required": "Content is required"},
    )
    excerpt = forms.CharField(required=False)
    published = forms.BooleanField(required=False)
    cover_image = forms.CharField(required=False, max_length=500)
    category = forms.ModelChoiceField(
        queryset=Category.objects.all(),
        required=False,
        error_messages={"invalid_choice": "Category does not exist"},
    )

    def clean_content(self):
        content = self.cleaned_data["content"]
        if not content.strip():
            raise ValidationError("Content is required", code="required")
        return content

    def clean_published(self):
        # CheckboxInput treats any truthy value as checked
        if "published" in self.data and not isinstance(self.data["published"], bool):
            raise ValidationError("Published must be true or false", code="invalid")
        return self.cleaned_data["published"]

    def changes(self):
        """Return the cleaned fields to apply to an existing post."""
        data = validate(self)
        return {
            name: value
            for name, value in data.items()
            if name not in self.KEEP_WHEN_ABSENT or name in self.data
        }


class CategoryForm(forms.Form):
    """Payload for creating a category."""

    name = forms.CharField(
        max_length=100,
        error_messages={"required": "Name is required"},
    )
    description = forms.CharField(required=False)
    color = forms.RegexField(
        regex=r"^#[0-9a-fA-F]{6}$",
        required=False,
        error_messages={"invalid": "Color must be a hex value like #3B82F6"},
    )
