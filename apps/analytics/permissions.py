"""
Custom permission classes for analytics app.

Permission Classes:
    IsShopMemberForAnalytics - Requires shop membership for shop reports

Usage:
    from apps.analytics.permissions import IsShopMemberForAnalytics

    @api_view(['GET'])
    @permission_classes([IsAuthenticated, IsShopMemberForAnalytics])
    def revenue_summary(request):
        # Membership already verified
        ...
"""

from django.core.exceptions import ValidationError
from rest_framework.permissions import BasePermission

from apps.shops.models import Shop


class IsShopMemberForAnalytics(BasePermission):
    """
    Permission check for shop revenue reports.

    Reads the shop id from the ``shop`` query parameter.

    Access is allowed if:
    - No shop is specified (the query serializer then rejects the request)
    - User is on the staff of the specified shop

    Access is denied if:
    - Shop doesn't exist or the id is malformed (403)
    - User is not a member of the shop
    """

    message = 'You must be a member of this shop to view its reports.'

    def has_permission(self, request, view):
        shop_id = request.query_params.get('shop')
        if not shop_id:
            return True

        try:
            shop = Shop.objects.get(id=shop_id)
        except (Shop.DoesNotExist, ValidationError):
            return False
        return shop.has_member(request.user)
