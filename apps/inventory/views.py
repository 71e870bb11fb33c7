from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes

from apps.orders.services.exceptions import TransactionConflictError
from apps.shops.permissions import IsShopManager
from apps.shops.services import get_shop_for_member
from .models import Ingredient
from .serializers import IngredientSerializer, RestockSerializer, ErrorSerializer
from .services import InventoryServiceError, IngredientNotFoundError, InvalidRestockError
from .services.ledger import restock_ingredient, reset_ingredient_usage


SHOP_PARAMETER = OpenApiParameter('shop', OpenApiTypes.UUID, required=True, description='Shop id')


class IngredientPagination(PageNumberPagination):
    """Custom pagination for ingredients."""
    page_size = 50
    page_size_query_param = 'page_size'
    max_page_size = 200


class IngredientViewSet(viewsets.ReadOnlyModelViewSet):
    """
    ViewSet for the stock ledger.

    Ingredients are read here; stock only changes through the ``restock``
    and ``reset_usage`` actions and through order placement.

    list: Ingredients of a shop (``?shop=<id>``)
    retrieve: One ingredient of a shop the user works at
    restock: Add stock units
    reset_usage: Set consumed amount back to zero (managers only)
    low_stock: Ingredients at or below their minimum
    """

    serializer_class = IngredientSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = IngredientPagination

    def get_queryset(self):
        """List actions are scoped to the ``shop`` parameter, detail actions to the user's shops."""
        queryset = Ingredient.objects.select_related('shop')
        if self.action in ['list', 'low_stock']:
            shop = get_shop_for_member(self.request.user, self.request.query_params.get('shop'))
            return queryset.filter(shop=shop)
        return queryset.filter(shop__memberships__user=self.request.user).distinct()

    def get_permissions(self):
        if self.action == 'reset_usage':
            return [IsAuthenticated(), IsShopManager()]
        return [IsAuthenticated()]

    @extend_schema(parameters=[SHOP_PARAMETER])
    def list(self, request, *args, **kwargs):
        return super().list(request, *args, **kwargs)

    def _ledger_response(self, operation, *args):
        try:
            ingredient = operation(*args)
        except IngredientNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except InvalidRestockError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)
        except TransactionConflictError as e:
            return Response({'error': str(e)}, status=status.HTTP_503_SERVICE_UNAVAILABLE)
        except InventoryServiceError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)
        return Response(IngredientSerializer(ingredient).data)

    @extend_schema(
        request=RestockSerializer,
        responses={200: IngredientSerializer, 400: ErrorSerializer, 404: ErrorSerializer, 503: ErrorSerializer},
    )
    @action(detail=True, methods=['post'])
    def restock(self, request, pk=None):
        """Add stock units to an ingredient."""
        ingredient = self.get_object()
        serializer = RestockSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        return self._ledger_response(restock_ingredient, ingredient.pk, serializer.validated_data['quantity'])

    @extend_schema(
        request=None,
        responses={200: IngredientSerializer, 404: ErrorSerializer, 503: ErrorSerializer},
    )
    @action(detail=True, methods=['post'])
    def reset_usage(self, request, pk=None):
        """Set an ingredient's consumed amount back to zero."""
        ingredient = self.get_object()
        return self._ledger_response(reset_ingredient_usage, ingredient.pk)

    @extend_schema(parameters=[SHOP_PARAMETER], responses=IngredientSerializer(many=True))
    @action(detail=False, methods=['get'])
    def low_stock(self, request):
        """Ingredients of a shop at or below their minimum stock."""
        ingredients = [i for i in self.get_queryset() if i.is_low_stock]
        serializer = self.get_serializer(ingredients, many=True)
        return Response(serializer.data)
