from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework import status
from django.shortcuts import get_object_or_404
from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes
from apps.shops.models import Shop
from .analytics import RevenueQueries
from .serializers import (
    # Input serializers
    DailyRevenueQuerySerializer,
    PeriodQuerySerializer,
    TopItemsQuerySerializer,
    # Response serializers
    DailyRevenueSerializer,
    RevenueSummarySerializer,
    PeakHoursResponseSerializer,
    TopItemsResponseSerializer,
    TimeseriesResponseSerializer,
    ErrorSerializer,
)
from .permissions import IsShopMemberForAnalytics
from .exceptions import AnalyticsServiceError


PERIOD_PARAMETERS = [
    OpenApiParameter('shop', OpenApiTypes.UUID, required=True, description='Shop id'),
    OpenApiParameter('period', OpenApiTypes.STR, description='Month period (YYYY-MM)'),
    OpenApiParameter('start_date', OpenApiTypes.DATE, description='Start date (YYYY-MM-DD)'),
    OpenApiParameter('end_date', OpenApiTypes.DATE, description='End date (YYYY-MM-DD)'),
]


def _validated_params(request, serializer_class):
    query_serializer = serializer_class(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)
    params = query_serializer.validated_data
    shop = get_object_or_404(Shop, id=params['shop'], is_active=True)
    return shop, params


@extend_schema(
    parameters=[
        OpenApiParameter('shop', OpenApiTypes.UUID, required=True, description='Shop id'),
        OpenApiParameter('date', OpenApiTypes.DATE, description='Day (YYYY-MM-DD), defaults to today'),
    ],
    responses={
        200: DailyRevenueSerializer,
        403: ErrorSerializer,
    },
    description="Get a shop's revenue rollup for one day.",
    tags=['analytics'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsShopMemberForAnalytics])
def daily_revenue(request):
    """Get one day's revenue rollup - thin HTTP handler."""
    shop, params = _validated_params(request, DailyRevenueQuerySerializer)
    return Response(RevenueQueries.daily_record(shop.id, params['date']))


@extend_schema(
    parameters=PERIOD_PARAMETERS,
    responses={
        200: RevenueSummarySerializer,
        400: ErrorSerializer,
        403: ErrorSerializer,
    },
    description="Summarise a shop's revenue, customers, payment methods and approved expenses over a period.",
    tags=['analytics'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsShopMemberForAnalytics])
def revenue_summary(request):
    """Get a period summary - thin HTTP handler."""
    shop, params = _validated_params(request, PeriodQuerySerializer)

    try:
        data = RevenueQueries.period_summary(
            shop_id=shop.id,
            start_date=params.get('start_date'),
            end_date=params.get('end_date'),
        )
    except AnalyticsServiceError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response(data)


@extend_schema(
    parameters=PERIOD_PARAMETERS,
    responses={
        200: PeakHoursResponseSerializer,
        400: ErrorSerializer,
        403: ErrorSerializer,
    },
    description='Get revenue per hour of day over a period, busiest first.',
    tags=['analytics'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsShopMemberForAnalytics])
def peak_hours(request):
    """Get peak hours - thin HTTP handler."""
    shop, params = _validated_params(request, PeriodQuerySerializer)

    try:
        data = RevenueQueries.peak_hours(
            shop_id=shop.id,
            start_date=params.get('start_date'),
            end_date=params.get('end_date'),
        )
    except AnalyticsServiceError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response({
        'period_start': params.get('start_date'),
        'period_end': params.get('end_date'),
        'results': data,
    })


@extend_schema(
    parameters=PERIOD_PARAMETERS + [
        OpenApiParameter('limit', OpenApiTypes.INT, description='Number of results', default=10),
    ],
    responses={
        200: TopItemsResponseSerializer,
        400: ErrorSerializer,
        403: ErrorSerializer,
    },
    description='Get best selling menu items by quantity over a period.',
    tags=['analytics'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsShopMemberForAnalytics])
def top_items(request):
    """Get top selling items - thin HTTP handler."""
    shop, params = _validated_params(request, TopItemsQuerySerializer)

    try:
        data = RevenueQueries.top_items(
            shop_id=shop.id,
            start_date=params.get('start_date'),
            end_date=params.get('end_date'),
            limit=params.get('limit'),
        )
    except AnalyticsServiceError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response({
        'period_start': params.get('start_date'),
        'period_end': params.get('end_date'),
        'results': data,
    })


@extend_schema(
    parameters=PERIOD_PARAMETERS,
    responses={
        200: TimeseriesResponseSerializer,
        400: ErrorSerializer,
        403: ErrorSerializer,
    },
    description='Get revenue per day for chart visualizations.',
    tags=['analytics'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsShopMemberForAnalytics])
def revenue_timeseries(request):
    """Get revenue timeseries - thin HTTP handler."""
    shop, params = _validated_params(request, PeriodQuerySerializer)

    try:
        data = RevenueQueries.revenue_timeseries(
            shop_id=shop.id,
            start_date=params.get('start_date'),
            end_date=params.get('end_date'),
        )
    except AnalyticsServiceError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response({'data': data})
