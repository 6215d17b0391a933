"""
URL configuration for django-miniblog.

Include in your project urls.py:

    path('blog/', include('miniblog.urls')),
"""
from django.urls import path

from . import views

app_name = "miniblog"

urlpatterns = [
    # Posts
    path("posts/", views.PostCollectionView.as_view(), name="post_list"),
    path("posts/<int:pk>/", views.PostDetailView.as_view(), name="post_detail"),
    path("posts/slug/<slug:slug>/", views.PostSlugDetailView.as_view(), name="post_detail_slug"),

    # Categories
    path("categories/", views.CategoryCollectionView.as_view(), name="category_list"),

    # Cover images
    path("uploads/", views.CoverUploadView.as_view(), name="upload"),

    # Staff
    path("dashboard/", views.DashboardView.as_view(), name="dashboard"),
]
