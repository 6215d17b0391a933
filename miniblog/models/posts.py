"""
Post and Category models for django-miniblog.
"""
from django.conf import settings
from django.db import models
from django.urls import reverse
from django.utils import timezone

from ..conf import blog_settings
from ..slugs import save_with_unique_slug
from ..text import derive_excerpt


class SluggedModel(models.Model):
    """
    Abstract model with a unique slug derived from another field.

    A blank slug is assigned on save. Clear ``slug`` before saving to
    re-derive it, e.g. after the source field changed.
    """

    slug_source_field = "name"

    slug = models.SlugField(
        max_length=blog_settings.SLUG_MAX_LENGTH,
        unique=True,
        blank=True,
    )

    class Meta:
        abstract = True

    def save(self, *args, **kwargs):
        if self.slug:
            super().save(*args, **kwargs)
            return
        save_with_unique_slug(
            self,
            getattr(self, self.slug_source_field),
            super().save,
            *args,
            **kwargs,
        )


class Category(SluggedModel):
    """Category for organizing posts."""

    name = models.CharField(max_length=100)
    description = models.TextField(blank=True)
    color = models.CharField(
        max_length=7,
        blank=True,
        help_text="Hex color for the category badge (e.g., #3B82F6)",
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["name"]
        verbose_name_plural = "Categories"

    def __str__(self):
        return self.name

    def get_absolute_url(self):
        return f"{reverse('miniblog:post_list')}?category={self.slug}"

    @property
    def post_count(self):
        """Return count of published posts in this category."""
        return self.posts.filter(published=True).count()


class Post(SluggedModel):
    """
    Blog post.

    The slug is derived from the title and only changes when the title does.
    The author is set at creation and never changes.
    """

    slug_source_field = "title"

    title = models.CharField(max_length=blog_settings.TITLE_MAX_LENGTH)
    content = models.TextField()
    excerpt = models.TextField(
        blank=True,
        help_text="Optional manual excerpt. Auto-generated if blank.",
    )

    author = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="miniblog_posts",
    )
    category = models.ForeignKey(
        Category,
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
        related_name="posts",
    )

    # Status
    published = models.BooleanField(default=False)
    published_at = models.DateTimeField(
        null=True,
        blank=True,
        db_index=True,
        help_text="When post was first published",
    )

    cover_image = models.CharField(
        max_length=500,
        blank=True,
        help_text="Reference returned by the file store",
    )

    view_count = models.PositiveIntegerField(default=0)

    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["published", "-created_at"]),
            models.Index(fields=["author", "-created_at"]),
        ]

    def __str__(self):
        return self.title

    def save(self, *args, **kwargs):
        if not self.excerpt:
            self.excerpt = derive_excerpt(self.content)

        # Set published_at the first time the post goes live
        if self.published and not self.published_at:
            self.published_at = timezone.now()

        super().save(*args, **kwargs)

    def get_absolute_url(self):
        return reverse("miniblog:post_detail_slug", kwargs={"slug": self.slug})

    def can_view(self, user):
        """Published posts are public; drafts are visible to their author only."""
        if self.published:
            return True
        return bool(user and user.is_authenticated and user.pk == self.author_id)

    def publish(self):
        """Publish the post immediately."""
        self.published = True
        if not self.published_at:
            self.published_at = timezone.now()
        self.save(update_fields=["published", "published_at", "updated_at"])

    def unpublish(self):
        """Move the post back to drafts."""
        self.published = False
        self.save(update_fields=["published", "updated_at"])

    def increment_view_count(self):
        """Increment view count atomically."""
        Post.objects.filter(pk=self.pk).update(view_count=models.F("view_count") + 1)
