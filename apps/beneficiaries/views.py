from rest_framework import viewsets
from rest_framework.decorators import action
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from apps.purchases.cache import BENEFICIARIES_LISTING, get_cached_listing, set_cached_listing
from apps.purchases.serializers import BeneficiaryPurchaseSerializer
from apps.purchases.services import get_beneficiary_purchases
from apps.purchases.views import PurchasePagination, error_response, invalid_request_response

from .models import Beneficiary
from .serializers import (
    BeneficiarySerializer,
    BeneficiaryVerifyInputSerializer,
    BeneficiaryVerifySerializer,
)
from .services import verify_beneficiary


class BeneficiaryViewSet(viewsets.ReadOnlyModelViewSet):
    """
    Beneficiaries of the loyalty program (read-only).

    list: All beneficiaries with their balances
    retrieve: Get a specific beneficiary
    purchases: Purchase history of a beneficiary
    verify: Look a beneficiary up by email before recording a purchase
    """

    queryset = Beneficiary.objects.all()
    serializer_class = BeneficiarySerializer
    pagination_class = PurchasePagination

    def list(self, request, *args, **kwargs):
        """Cached between purchases; a new purchase changes balances."""
        cache_params = {
            'page': request.query_params.get('page'),
            'page_size': request.query_params.get('page_size'),
        }
        cached = get_cached_listing(BENEFICIARIES_LISTING, **cache_params)
        if cached is not None:
            return Response(cached)

        response = super().list(request, *args, **kwargs)
        set_cached_listing(response.data, BENEFICIARIES_LISTING, **cache_params)
        return response

    @extend_schema(
        responses={200: BeneficiaryPurchaseSerializer(many=True)},
        tags=['beneficiaries'],
    )
    @action(detail=True, methods=['get'])
    def purchases(self, request, pk=None):
        """
        Purchase history, newest first.

        GET /api/beneficiaries/{id}/purchases/
        """
        beneficiary = self.get_object()

        result = get_beneficiary_purchases(beneficiary.id)
        if not result['success']:
            return error_response(result)

        return Response({
            'success': True,
            'data': BeneficiaryPurchaseSerializer(result['data'], many=True).data,
        })

    @extend_schema(
        request=BeneficiaryVerifyInputSerializer,
        responses={200: BeneficiaryVerifySerializer},
        tags=['beneficiaries'],
    )
    @action(detail=False, methods=['post'])
    def verify(self, request):
        """
        Confirm a beneficiary by email.

        POST /api/beneficiaries/verify/
        """
        input_serializer = BeneficiaryVerifyInputSerializer(data=request.data)
        if not input_serializer.is_valid():
            return invalid_request_response(input_serializer.errors)

        result = verify_beneficiary(input_serializer.validated_data['email'])
        if not result['success']:
            return error_response(result)

        return Response({
            'success': True,
            'data': BeneficiaryVerifySerializer(result['data']).data,
        })
