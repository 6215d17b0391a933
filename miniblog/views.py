"""
JSON views for django-miniblog.
"""
import logging

from django.core.exceptions import PermissionDenied, ValidationError
from django.core.paginator import Paginator
from django.db import DatabaseError
from django.db.models import Count, Q, Sum
from django.http import Http404, JsonResponse
from django.shortcuts import get_object_or_404
from django.views import View

from . import services, uploads
from .conf import blog_settings
from .exceptions import (
    BlogError,
    NotAuthenticated,
    SlugConflictExhausted,
    StorageUnavailable,
)
from .forms import CategoryForm, PostForm, parse_json_body, validate
from .models import Category, Post
from .permissions import DELETE, UPDATE, get_post_for_mutation

logger = logging.getLogger(__name__)


def error_response(message, code, status, **extra):
    return JsonResponse({"error": message, "code": code, **extra}, status=status)


def serialize_category(category):
    data = {
        "id": category.pk,
        "name": category.name,
        "slug": category.slug,
        "description": category.description,
        "color": category.color,
    }
    if hasattr(category, "num_posts"):
        data["post_count"] = category.num_posts
    return data


def serialize_post(post):
    return {
        "id": post.pk,
        "title": post.title,
        "slug": post.slug,
        "content": post.content,
        "excerpt": post.excerpt,
        "published": post.published,
        "published_at": post.published_at.isoformat() if post.published_at else None,
        "cover_image": post.cover_image or None,
        "view_count": post.view_count,
        "author": {
            "id": post.author.pk,
            "username": post.author.get_username(),
        },
        "category": serialize_category(post.category) if post.category else None,
        "created_at": post.created_at.isoformat(),
        "updated_at": post.updated_at.isoformat(),
    }


def require_identity(request):
    """Raise NotAuthenticated for anonymous requests."""
    if not request.user.is_authenticated:
        raise NotAuthenticated("Authentication required")
    return request.user


class JSONView(View):
    """
    Base view mapping miniblog errors to stable JSON responses.

    400 validation_failed, 401 unauthorized, 403 forbidden, 404 not_found,
    409 slug_conflict, 500 upstream_error.
    """

    def dispatch(self, request, *args, **kwargs):
        try:
            return super().dispatch(request, *args, **kwargs)
        except ValidationError as exc:
            if hasattr(exc, "error_dict"):
                details = exc.message_dict
            else:
                details = {"__all__": exc.messages}
            return error_response("Validation failed", "validation_failed", 400, details=details)
        except NotAuthenticated as exc:
            return error_response(str(exc) or "Unauthorized", NotAuthenticated.code, 401)
        except PermissionDenied as exc:
            return error_response(str(exc) or "Forbidden", "forbidden", 403)
        except Http404 as exc:
            return error_response(str(exc) or "Not found", "not_found", 404)
        except SlugConflictExhausted as exc:
            logger.error("%s", exc)
            return error_response(str(exc), exc.code, 409)
        except (StorageUnavailable, DatabaseError) as exc:
            logger.exception("Upstream failure in %s %s", request.method, request.path)
            message = str(exc) if isinstance(exc, BlogError) else "Database error"
            return error_response(message, "upstream_error", 500)


class PostCollectionView(JSONView):
    """List posts or create a new one."""

    def get_queryset(self):
        qs = Post.objects.select_related("author", "category")

        # Drafts are only listed for their author
        user = self.request.user
        if user.is_authenticated:
            qs = qs.filter(Q(published=True) | Q(author=user))
        else:
            qs = qs.filter(published=True)

        published = self.request.GET.get("published")
        if published is not None:
            qs = qs.filter(published=published.lower() == "true")

        category = self.request.GET.get("category")
        if category:
            qs = qs.filter(category__slug=category)

        return qs

    def get_limit(self):
        try:
            limit = int(self.request.GET.get("limit", blog_settings.POSTS_PER_PAGE))
        except ValueError:
            raise ValidationError({"limit": "Limit must be an integer"})
        return max(1, min(limit, blog_settings.MAX_PAGE_SIZE))

    def get(self, request):
        paginator = Paginator(self.get_queryset(), self.get_limit())
        page = paginator.get_page(request.GET.get("page"))
        return JsonResponse({
            "posts": [serialize_post(post) for post in page],
            "pagination": {
                "page": page.number,
                "limit": paginator.per_page,
                "total": paginator.count,
                "total_pages": paginator.num_pages,
            },
        })

    def post(self, request):
        user = require_identity(request)
        data = validate(PostForm(parse_json_body(request)))
        post = services.create_post(user, data)
        return JsonResponse({"post": serialize_post(post)}, status=201)


class PostDetailView(JSONView):
    """Fetch, update or delete a single post by id."""

    def get(self, request, pk):
        post = get_object_or_404(Post.objects.select_related("author", "category"), pk=pk)
        if not post.can_view(request.user):
            raise Http404("Post not found")
        return JsonResponse({"post": serialize_post(post)})

    def put(self, request, pk):
        user = require_identity(request)
        # Authorize before looking at the body
        post = get_post_for_mutation(pk, user, UPDATE)
        form = PostForm(parse_json_body(request))
        post = services.update_post(post, form.changes())
        return JsonResponse({"post": serialize_post(post)})

    def delete(self, request, pk):
        user = require_identity(request)
        post = get_post_for_mutation(pk, user, DELETE)
        deleted = services.delete_post(post)
        return JsonResponse({
            "message": "Post deleted successfully",
            "deleted_post": deleted,
        })


class PostSlugDetailView(JSONView):
    """Display a single post by slug and count the view."""

    def get(self, request, slug):
        post = get_object_or_404(Post.objects.select_related("author", "category"), slug=slug)
        if not post.can_view(request.user):
            raise Http404("Post not found")

        post.increment_view_count()
        post.refresh_from_db(fields=["view_count"])
        return JsonResponse({"post": serialize_post(post)})


class CategoryCollectionView(JSONView):
    """List categories or create a new one."""

    def get(self, request):
        categories = Category.objects.annotate(
            num_posts=Count("posts", filter=Q(posts__published=True)),
        ).order_by("name")
        return JsonResponse({
            "categories": [serialize_category(category) for category in categories],
        })

    def post(self, request):
        require_identity(request)
        data = validate(CategoryForm(parse_json_body(request)))
        category = services.create_category(data)
        return JsonResponse({"category": serialize_category(category)}, status=201)


class CoverUploadView(JSONView):
    """Upload or remove cover images."""

    def post(self, request):
        require_identity(request)
        file_obj = request.FILES.get("file")
        if file_obj is None:
            raise ValidationError({"file": "No file provided"})
        return JsonResponse(uploads.store_cover_image(file_obj), status=201)

    def delete(self, request):
        require_identity(request)
        file_name = request.GET.get("file_name")
        if not file_name:
            raise ValidationError({"file_name": "File name is required"})
        if not uploads.delete_upload(file_name):
            raise Http404("File not found")
        return JsonResponse({"message": "File deleted successfully"})


class DashboardView(JSONView):
    """Site-wide post statistics for staff users."""

    recent_limit = 20

    def get(self, request):
        user = require_identity(request)
        if not user.is_staff:
            raise PermissionDenied("Admin access required")

        stats = Post.objects.aggregate(
            total=Count("id"),
            published=Count("id", filter=Q(published=True)),
            views=Sum("view_count"),
        )
        recent = Post.objects.select_related("author", "category")[:self.recent_limit]
        return JsonResponse({
            "stats": {
                "total_posts": stats["total"],
                "published_posts": stats["published"],
                "draft_posts": stats["total"] - stats["published"],
                "total_views": stats["views"] or 0,
            },
            "recent_posts": [serialize_post(post) for post in recent],
        })
