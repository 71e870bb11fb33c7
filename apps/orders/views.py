from rest_framework import mixins, viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes

from apps.shops.services import get_shop_for_member
from .models import Order
from .serializers import (
    OrderInputSerializer,
    OrderSerializer,
    OrderListSerializer,
    OrderCheckResponseSerializer,
    PlacedOrderResponseSerializer,
    OrderErrorsSerializer,
    StockErrorSerializer,
    ErrorSerializer,
)
from .services import (
    check_order,
    place_order,
    # Exceptions
    OrderValidationFailed,
    InsufficientStockError,
    TransactionConflictError,
    MissingReferenceError,
)


class OrderPagination(PageNumberPagination):
    """Custom pagination for orders."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


class OrderViewSet(mixins.ListModelMixin,
                   mixins.RetrieveModelMixin,
                   viewsets.GenericViewSet):
    """
    ViewSet for orders.

    All business logic is handled by services.
    Views are thin HTTP handlers only.

    list: Orders of a shop (``?shop=<id>``), newest first
    retrieve: One order with its lines
    create: Place an order, consuming its ingredients
    validate: Check a draft without placing it
    """

    serializer_class = OrderSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = OrderPagination

    def get_queryset(self):
        queryset = Order.objects.select_related('customer', 'shop').prefetch_related('items')
        if self.action == 'list':
            shop = get_shop_for_member(self.request.user, self.request.query_params.get('shop'))
            return queryset.filter(shop=shop)
        return queryset.filter(shop__memberships__user=self.request.user).distinct()

    def get_serializer_class(self):
        if self.action == 'list':
            return OrderListSerializer
        if self.action in ['create', 'validate']:
            return OrderInputSerializer
        return OrderSerializer

    def _draft_from_request(self, request):
        serializer = OrderInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        shop = get_shop_for_member(request.user, serializer.validated_data['shop'])
        return shop, serializer.to_draft(shop)

    @extend_schema(parameters=[OpenApiParameter('shop', OpenApiTypes.UUID, required=True, description='Shop id')])
    def list(self, request, *args, **kwargs):
        return super().list(request, *args, **kwargs)

    @extend_schema(
        request=OrderInputSerializer,
        responses={
            201: PlacedOrderResponseSerializer,
            400: OrderErrorsSerializer,
            404: ErrorSerializer,
            409: StockErrorSerializer,
            503: ErrorSerializer,
        },
    )
    def create(self, request, *args, **kwargs):
        """Place an order."""
        shop, draft = self._draft_from_request(request)

        try:
            result = place_order(shop, draft, created_by=request.user)
        except OrderValidationFailed as e:
            return Response(
                {'errors': [issue.to_dict() for issue in e.errors]},
                status=status.HTTP_400_BAD_REQUEST
            )
        except InsufficientStockError as e:
            return Response(
                {'error': str(e), 'ingredient': e.ingredient_name},
                status=status.HTTP_409_CONFLICT
            )
        except TransactionConflictError as e:
            return Response({'error': str(e)}, status=status.HTTP_503_SERVICE_UNAVAILABLE)
        except MissingReferenceError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        order = Order.objects.prefetch_related('items').select_related('customer').get(pk=result.order_id)
        return Response(
            {
                'order': OrderSerializer(order).data,
                'alerts': [alert.to_dict() for alert in result.alerts],
            },
            status=status.HTTP_201_CREATED
        )

    @extend_schema(request=OrderInputSerializer, responses={200: OrderCheckResponseSerializer})
    @action(detail=False, methods=['post'])
    def validate(self, request):
        """Check a draft against the menu and current stock without placing it."""
        shop, draft = self._draft_from_request(request)
        issues = check_order(shop, draft)
        return Response({
            'valid': not issues,
            'errors': [issue.to_dict() for issue in issues],
        })
