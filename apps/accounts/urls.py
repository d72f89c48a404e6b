from django.urls import path
from rest_framework_simplejwt.views import TokenRefreshView
from . import views

app_name = 'accounts'

urlpatterns = [
    # Authentication
    path('auth/team/login/', views.team_login, name='team-login'),
    path('auth/admin/login/', views.admin_login, name='admin-login'),
    path('auth/verify/', views.verify_token, name='verify'),
    path('auth/refresh/', TokenRefreshView.as_view(), name='token-refresh'),
    path('auth/logout/', views.logout, name='logout'),

    # Team profile
    path('team/profile/', views.team_profile, name='team-profile'),

    # Admin roster
    path('admin/teams/', views.admin_teams, name='admin-teams'),
]
