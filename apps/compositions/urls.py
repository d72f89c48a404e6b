from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'compositions'

router = DefaultRouter()
router.register(r'admin/team-compositions', views.TeamCompositionViewSet, basename='team-composition')

urlpatterns = [
    # GET    /api/admin/team-compositions/              - List compositions
    # POST   /api/admin/team-compositions/{id}/toggle/  - Fill or free a seat
    path('', include(router.urls)),
]
