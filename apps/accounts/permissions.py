from rest_framework import permissions


class IsTeam(permissions.BasePermission):
    """
    Permission: authenticated principal must be a team account.
    """

    message = 'Insufficient permissions'

    def has_permission(self, request, view):
        user = request.user
        return bool(user and user.is_authenticated and getattr(user, 'is_team', False))


class IsAdministrator(permissions.BasePermission):
    """
    Permission: authenticated principal must be an admin account.
    """

    message = 'Insufficient permissions'

    def has_permission(self, request, view):
        user = request.user
        return bool(user and user.is_authenticated and getattr(user, 'is_administrator', False))
