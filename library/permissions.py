"""DRF permission classes for read paths that serve profiles and catalog items.

A denial raises NotFound rather than PermissionDenied so a hidden record looks
exactly like one that does not exist.
"""

from rest_framework.exceptions import NotFound
from rest_framework.permissions import BasePermission

from library.services import AccessControlFacade


def acting_user_id(request):
    """Acting-user id placed on the request by the identity-provider layer."""
    return getattr(request, "acting_user_id", None)


class _FacadePermission(BasePermission):
    facade_class = AccessControlFacade

    def get_facade(self):
        return self.facade_class()

    def _check(self, allowed):
        if not allowed:
            raise NotFound()
        return True


class CanViewProfile(_FacadePermission):
    """Object permission for Profile detail views."""

    def has_object_permission(self, request, view, obj):
        return self._check(self.get_facade().can_view_profile(acting_user_id(request), obj))


class CanViewCatalogItem(_FacadePermission):
    """Object permission for CatalogItem detail views."""

    def has_object_permission(self, request, view, obj):
        return self._check(self.get_facade().can_view_catalog_item(acting_user_id(request), obj))
