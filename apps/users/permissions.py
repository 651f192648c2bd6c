"""Role-based permission classes shared by the API apps."""

from __future__ import annotations

from rest_framework import permissions  # type: ignore


def is_admin_user(user) -> bool:
    """True for customers with the admin role and for Django staff."""
    if not user or not user.is_authenticated:
        return False
    if getattr(user, "is_staff", False) or getattr(user, "is_superuser", False):
        return True
    return hasattr(user, "is_admin") and user.is_admin()


class IsAdminRole(permissions.BasePermission):
    """Only back-office administrators."""

    message = "Admin access required."

    def has_permission(self, request, view) -> bool:  # type: ignore
        return is_admin_user(request.user)


class IsAdminRoleOrReadOnly(permissions.BasePermission):
    """
    Allow administrators to write, but anyone authenticated can read.
    """

    message = "Admin access required."

    def has_permission(self, request, view) -> bool:  # type: ignore
        user = request.user
        if not user or not user.is_authenticated:
            return False

        if request.method in permissions.SAFE_METHODS:
            return True

        return is_admin_user(user)
