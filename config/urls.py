"""URL configuration for the car rental project.

The `urlpatterns` list routes URLs to views. It includes the Django admin,
the OpenAPI schema and the routers provided by each app.
"""
from django.contrib import admin  # type: ignore
from django.urls import path, include  # type: ignore
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView  # type: ignore

# API versioning. v1 is our initial version; future versions can be added here.

urlpatterns = [
    path('admin/', admin.site.urls),
    # Application URLs
    path('api/v1/auth/', include(('apps.users.auth_urls', 'auth'), namespace='auth')),
    path('api/v1/', include('apps.branches.urls')),
    path('api/v1/', include('apps.vehicles.urls')),
    path('api/v1/', include('apps.reservations.urls')),
    path('api/v1/', include('apps.payments.urls')),
    path('api/v1/analytics/', include('apps.analytics.urls')),
    # API documentation
    path('api/v1/schema/', SpectacularAPIView.as_view(), name='schema'),
    path('api/v1/docs/', SpectacularSwaggerView.as_view(url_name='schema'), name='docs'),
]
