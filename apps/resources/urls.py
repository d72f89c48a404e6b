from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'resources'

router = DefaultRouter()
router.register(r'resources', views.ResourceViewSet, basename='resource')

urlpatterns = [
    # GET    /api/resources/          - List active resources (?type=)
    # GET    /api/resources/{id}/     - Get resource details
    path('', include(router.urls)),
]
