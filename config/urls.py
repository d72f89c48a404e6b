"""
URL configuration for the Team Credit Marketplace.

Every app contributes its routes under ``/api/``; the app URL modules spell
out their own sub-prefixes (``team/``, ``admin/``, ``auth/``) so the team and
admin surfaces of one app stay together.
"""
from django.contrib import admin
from django.urls import path, include
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView

from config.views import health_check

urlpatterns = [
    # Health check
    path('api/health/', health_check, name='health-check'),

    # Django admin site
    path('django-admin/', admin.site.urls),

    # API Documentation
    path('api/schema/', SpectacularAPIView.as_view(), name='api-schema'),
    path('api/docs/', SpectacularSwaggerView.as_view(url_name='api-schema'), name='api-docs'),

    # API endpoints
    path('api/', include('apps.accounts.urls')),
    path('api/', include('apps.resources.urls')),
    path('api/', include('apps.purchases.urls')),
    path('api/', include('apps.cart.urls')),
    path('api/', include('apps.compositions.urls')),
    path('api/', include('apps.polls.urls')),
]


# Custom error handlers
handler404 = 'config.views.error_404'
handler500 = 'config.views.error_500'
