"""
URL configuration for testing django-miniblog.
"""
from django.contrib import admin
from django.urls import include, path

urlpatterns = [
    path("admin/", admin.site.urls),
    path("blog/", include("miniblog.urls")),
]
