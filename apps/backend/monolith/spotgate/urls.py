# spotgate/urls.py
"""
Main URL configuration for the spot order gateway.
"""

from django.urls import path, include

from api.views.health import healthz

urlpatterns = [
    # API routes
    path('api/', include('api.urls')),

    # Kubernetes liveness probe
    path('healthz', healthz, name='healthz'),
]
