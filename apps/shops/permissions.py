from rest_framework import permissions


class IsShopManager(permissions.BasePermission):
    """
    Permission: User must be shop owner or manager.

    Works for any object exposing ``shop`` or being a Shop itself.
    """

    def has_object_permission(self, request, view, obj):
        shop = getattr(obj, 'shop', obj)
        return shop.is_manager(request.user)
