from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from .context import get_active_organization_id, set_active_organization_id
from .serializers import ActiveOrganizationInputSerializer


@extend_schema(
    request=ActiveOrganizationInputSerializer,
    description="Read or select the organization the dashboard is scoped to.",
    tags=['organizations'],
)
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def active_organization(request):
    """
    GET  /api/organizations/active/ - Current active organization id
    POST /api/organizations/active/ - Select the active organization
    """
    if request.method == 'GET':
        return Response({
            'success': True,
            'organization_id': get_active_organization_id(request),
        })

    serializer = ActiveOrganizationInputSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(
            {'success': False, 'error': 'Invalid organization', 'details': serializer.errors},
            status=status.HTTP_400_BAD_REQUEST
        )

    organization_id = serializer.validated_data['organization_id']
    response = Response({'success': True, 'organization_id': organization_id})
    return set_active_organization_id(request, response, organization_id)
