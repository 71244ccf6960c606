# common/permissions.py
from rest_framework.permissions import BasePermission


class IsShopManager(BasePermission):
    """
    Only staff users manage suppliers, assignments and notification settings.
    """
    def has_permission(self, request, view):
        user = request.user
        return bool(user and user.is_authenticated and user.is_staff)
