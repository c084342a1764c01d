"""
Role and module based access control.

``admin`` users bypass the permission table.  Everyone else is granted
exactly what the ``permissions`` row for their role and the module
says; a missing row grants nothing.
"""
from __future__ import annotations

from rest_framework.permissions import BasePermission

ADMIN_ROLES = {"admin"}

METHOD_ACTIONS = {
    "GET": "view",
    "HEAD": "view",
    "OPTIONS": "view",
    "POST": "add",
    "PUT": "edit",
    "PATCH": "edit",
    "DELETE": "delete",
}


class IsAdminRole(BasePermission):
    """Allow access only to users with an administrative role."""
    def has_permission(self, request, view) -> bool:  # type: ignore[override]
        user = getattr(request, "user", None)
        return bool(user and user.is_authenticated and getattr(user, "role", None) in ADMIN_ROLES)


def module_permission(module: str, action: str | None = None):
    """Build a permission class gating a view on one module.

    Without ``action`` the HTTP method picks it (GET -> view, POST -> add,
    PUT/PATCH -> edit, DELETE -> delete).
    """
    from .services.permissions import has_permission

    class ModulePermission(BasePermission):
        message = f"Bạn không có quyền truy cập chức năng {module}."

        def has_permission(self, request, view) -> bool:
            user = getattr(request, "user", None)
            if not (user and user.is_authenticated):
                return False
            act = action or METHOD_ACTIONS.get(request.method, "view")
            return has_permission(user, module, act)

    ModulePermission.__name__ = f"ModulePermission_{module}"
    return ModulePermission
