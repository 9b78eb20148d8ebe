from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from apps.organizations.context import get_active_organization_id

from .serializers import PointsRuleSerializer, PointsCalculationInputSerializer
from .services import get_active_points_rules, calculate_points_preview


@extend_schema(
    responses={200: PointsRuleSerializer(many=True)},
    description="List active points rules for the active organization.",
    tags=['points'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def active_rules(request):
    """GET /api/points/rules/"""
    result = get_active_points_rules(organization_id=get_active_organization_id(request))
    if not result['success']:
        return Response(result, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

    return Response({
        'success': True,
        'data': PointsRuleSerializer(result['data'], many=True).data,
    })


@extend_schema(
    request=PointsCalculationInputSerializer,
    description="Preview the points an amount would earn right now.",
    tags=['points'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def calculate_points(request):
    """POST /api/points/calculate/"""
    serializer = PointsCalculationInputSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(
            {'success': False, 'error': 'Invalid request data', 'details': serializer.errors},
            status=status.HTTP_400_BAD_REQUEST
        )

    params = serializer.validated_data
    organization_id = params.get('organization_id') or get_active_organization_id(request)

    result = calculate_points_preview(
        amount=params['amount'],
        organization_id=organization_id,
        branch_id=params.get('branch_id'),
        category_id=params.get('category_id'),
    )
    if not result['success']:
        return Response(result, status=status.HTTP_502_BAD_GATEWAY)

    return Response(result)
