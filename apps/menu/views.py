from rest_framework import viewsets
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes

from apps.shops.services import get_shop_for_member
from .models import MenuItem
from .serializers import (
    MenuItemSerializer,
    MenuItemListSerializer,
    RefreshAvailabilitySerializer,
    RefreshAvailabilityResponseSerializer,
)
from .services import refresh_menu_availability

TRUE_VALUES = {'1', 'true', 'yes'}
FALSE_VALUES = {'0', 'false', 'no'}


class MenuPagination(PageNumberPagination):
    """Custom pagination for menus."""
    page_size = 50
    page_size_query_param = 'page_size'
    max_page_size = 200


class MenuItemViewSet(viewsets.ReadOnlyModelViewSet):
    """
    ViewSet for a shop's menu.

    list: Menu items of a shop (``?shop=<id>``), optionally filtered
    retrieve: One menu item with its recipe
    """

    serializer_class = MenuItemSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = MenuPagination

    def get_queryset(self):
        """
        Filter menu items based on query parameters.

        Filters:
        - shop: Required for listing
        - category: Exact category
        - available: true/false
        """
        queryset = MenuItem.objects.prefetch_related('recipe_lines')
        if self.action != 'list':
            return queryset.filter(shop__memberships__user=self.request.user).distinct()

        params = self.request.query_params
        shop = get_shop_for_member(self.request.user, params.get('shop'))
        queryset = queryset.filter(shop=shop)

        category = params.get('category')
        if category:
            queryset = queryset.filter(category=category)

        available = (params.get('available') or '').lower()
        if available in TRUE_VALUES:
            queryset = queryset.filter(is_available=True)
        elif available in FALSE_VALUES:
            queryset = queryset.filter(is_available=False)

        return queryset

    def get_serializer_class(self):
        if self.action == 'list':
            return MenuItemListSerializer
        return MenuItemSerializer

    @extend_schema(parameters=[
        OpenApiParameter('shop', OpenApiTypes.UUID, required=True, description='Shop id'),
        OpenApiParameter('category', OpenApiTypes.STR, description='Category'),
        OpenApiParameter('available', OpenApiTypes.BOOL, description='Only (un)available items'),
    ])
    def list(self, request, *args, **kwargs):
        return super().list(request, *args, **kwargs)


@extend_schema(
    request=RefreshAvailabilitySerializer,
    responses={200: RefreshAvailabilityResponseSerializer},
    description='Recompute availability of every menu item of a shop from current stock.',
    tags=['menu'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def refresh_availability(request):
    """Recompute menu availability - thin HTTP handler."""
    serializer = RefreshAvailabilitySerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    shop = get_shop_for_member(request.user, serializer.validated_data['shop'])

    changed = refresh_menu_availability(shop)
    return Response({'changed': MenuItemListSerializer(changed, many=True).data})
