"""
Django admin configuration for miniblog.

Slugs are read-only here; the models assign them. Changing a title or name
re-derives the slug.
"""
from django.contrib import admin

from .models import Category, Post


class SluggedModelAdmin(admin.ModelAdmin):
    """Clear the slug when its source field was edited so it is re-derived."""

    readonly_fields = ["slug"]

    def save_model(self, request, obj, form, change):
        if change and obj.slug_source_field in form.changed_data:
            obj.slug = ""
        super().save_model(request, obj, form, change)


@admin.register(Category)
class CategoryAdmin(SluggedModelAdmin):
    list_display = ["name", "slug", "color", "post_count", "created_at"]
    search_fields = ["name", "slug", "description"]
    readonly_fields = ["slug", "created_at", "updated_at"]


@admin.register(Post)
class PostAdmin(SluggedModelAdmin):
    list_display = [
        "title_preview",
        "author",
        "published",
        "category",
        "view_count",
        "created_at",
    ]
    list_filter = ["published", "category", "created_at"]
    search_fields = ["title", "content", "author__username"]
    raw_id_fields = ["author", "category"]
    date_hierarchy = "created_at"
    readonly_fields = [
        "slug",
        "view_count",
        "created_at",
        "updated_at",
        "published_at",
    ]

    fieldsets = (
        (None, {
            "fields": ("title", "slug", "content", "excerpt", "author")
        }),
        ("Taxonomy & Media", {
            "fields": ("category", "cover_image")
        }),
        ("Status", {
            "fields": ("published", "published_at")
        }),
        ("Metadata", {
            "fields": ("view_count", "created_at", "updated_at"),
            "classes": ("collapse",),
        }),
    )

    actions = ["publish_posts", "unpublish_posts"]

    def get_readonly_fields(self, request, obj=None):
        # Author is fixed once the post exists
        if obj is not None:
            return [*self.readonly_fields, "author"]
        return self.readonly_fields

    @admin.display(description="Title")
    def title_preview(self, obj):
        """Truncated title for list display."""
        return obj.title[:60] + "..." if len(obj.title) > 60 else obj.title

    @admin.action(description="Publish selected posts")
    def publish_posts(self, request, queryset):
        for post in queryset:
            post.publish()
        self.message_user(request, f"{queryset.count()} posts published.")

    @admin.action(description="Unpublish selected posts")
    def unpublish_posts(self, request, queryset):
        for post in queryset:
            post.unpublish()
        self.message_user(request, f"{queryset.count()} posts unpublished.")
