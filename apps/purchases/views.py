from rest_framework import viewsets, status
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema, OpenApiParameter

from apps.organizations.context import get_active_organization_id

from .cache import PURCHASES_LISTING, get_cached_listing, set_cached_listing
from .serializers import (
    PurchaseCreateInputSerializer,
    PurchaseFilterSerializer,
    PurchaseListSerializer,
    PurchaseDetailSerializer,
)
from .services import create_purchase, get_all_purchases, get_purchase_by_id


ERROR_STATUS = {
    'validation_error': status.HTTP_400_BAD_REQUEST,
    'not_found': status.HTTP_404_NOT_FOUND,
    'dependency_error': status.HTTP_502_BAD_GATEWAY,
    'persistence_error': status.HTTP_500_INTERNAL_SERVER_ERROR,
    'unexpected_error': status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def error_response(result):
    """Response for a failed service result, status chosen by error code."""
    return Response(
        result,
        status=ERROR_STATUS.get(result.get('error_code'), status.HTTP_500_INTERNAL_SERVER_ERROR)
    )


def invalid_request_response(errors):
    return Response(
        {
            'success': False,
            'error': 'Invalid request data',
            'error_code': 'validation_error',
            'details': errors,
        },
        status=status.HTTP_400_BAD_REQUEST
    )


class PurchasePagination(PageNumberPagination):
    """Custom pagination for purchases."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


class PurchaseViewSet(viewsets.GenericViewSet):
    """
    Purchases recorded at the dashboard.

    list: Purchases visible in the active organization (filterable)
    create: Record a purchase for a beneficiary and award its points
    retrieve: Get a purchase with its items

    Purchases are never updated or deleted through the API.
    """

    serializer_class = PurchaseDetailSerializer
    pagination_class = PurchasePagination

    def get_serializer_class(self):
        """Use different serializers for different actions."""
        if self.action == 'list':
            return PurchaseListSerializer
        elif self.action == 'create':
            return PurchaseCreateInputSerializer
        return PurchaseDetailSerializer

    @extend_schema(
        parameters=[PurchaseFilterSerializer],
        tags=['purchases'],
    )
    def list(self, request):
        """
        GET /api/purchases/

        Query: branch_id, organization_id, start_date, end_date, page, page_size.
        Without organization_id the active organization scopes the list.
        """
        filter_serializer = PurchaseFilterSerializer(data=request.query_params)
        if not filter_serializer.is_valid():
            return invalid_request_response(filter_serializer.errors)
        filters = filter_serializer.validated_data

        active_organization_id = get_active_organization_id(request)
        cache_params = {
            'filters': dict(filters),
            'active_organization_id': active_organization_id,
            'page': request.query_params.get('page'),
            'page_size': request.query_params.get('page_size'),
        }
        cached = get_cached_listing(PURCHASES_LISTING, **cache_params)
        if cached is not None:
            return Response(cached)

        result = get_all_purchases(filters, active_organization_id=active_organization_id)
        if not result['success']:
            return error_response(result)

        page = self.paginate_queryset(result['data'])
        serializer = PurchaseListSerializer(page, many=True)
        response = self.get_paginated_response(serializer.data)

        set_cached_listing(response.data, PURCHASES_LISTING, **cache_params)
        return response

    @extend_schema(tags=['purchases'])
    def retrieve(self, request, pk=None):
        """GET /api/purchases/{id}/"""
        result = get_purchase_by_id(pk)
        if not result['success']:
            return error_response(result)

        return Response({
            'success': True,
            'data': PurchaseDetailSerializer(result['data']).data,
        })

    @extend_schema(
        request=PurchaseCreateInputSerializer,
        tags=['purchases'],
    )
    def create(self, request):
        """
        POST /api/purchases/

        Body: {"beneficiary_id": 1, "branch_id": 2,
               "items": [{"item_name": "Coffee", "quantity": 2, "unit_price": "3.50"}],
               "notes": "optional"}
        or   {"beneficiary_id": 1, "branch_id": 2, "amount": "25.00"}
        """
        serializer = PurchaseCreateInputSerializer(data=request.data)
        if not serializer.is_valid():
            return invalid_request_response(serializer.errors)

        params = serializer.validated_data
        result = create_purchase(
            beneficiary_id=params['beneficiary_id'],
            cashier_id=request.user.id,
            branch_id=params['branch_id'],
            items=params['items'],
            notes=params.get('notes'),
        )
        if not result['success']:
            return error_response(result)

        return Response(result, status=status.HTTP_201_CREATED)
