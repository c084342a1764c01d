"""
URL configuration for the ward administration backend.

The `urlpatterns` list routes URLs to views.  This module includes
both the Django admin and the API routes provided by the ward app.
OpenAPI documentation is exposed at ``/swagger/`` and ``/redoc/``.
Uploaded files (storage buckets) are served from ``MEDIA_URL`` in
development.
"""
from django.conf import settings
from django.conf.urls.static import static
from django.contrib import admin
from django.urls import path, include

from rest_framework import permissions
from drf_yasg.views import get_schema_view
from drf_yasg import openapi

api_info = openapi.Info(
    title="Ward Administration API",
    default_version='v1',
    description="Personnel, leave, schedules, patient-card lending, research topics and settings.",
)

schema_view = get_schema_view(
    api_info,
    public=True,
    permission_classes=(permissions.AllowAny,),
)

urlpatterns = [
    path('admin/', admin.site.urls),
    path('', include('ward.routers')),
    path('swagger/', schema_view.with_ui('swagger', cache_timeout=0), name='schema-swagger-ui'),
    path('redoc/', schema_view.with_ui('redoc', cache_timeout=0), name='schema-redoc'),
]

if settings.DEBUG:
    urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)
