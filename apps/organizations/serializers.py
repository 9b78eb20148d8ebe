from rest_framework import serializers
from .models import Organization, Branch


class OrganizationMinimalSerializer(serializers.ModelSerializer):
    """Minimal organization info for nested serialization."""

    class Meta:
        model = Organization
        fields = ['id', 'name']
        read_only_fields = fields


class BranchMinimalSerializer(serializers.ModelSerializer):
    """Branch name plus owning organization id."""

    class Meta:
        model = Branch
        fields = ['id', 'name', 'organization_id']
        read_only_fields = fields


class BranchDetailSerializer(serializers.ModelSerializer):
    """Branch with its organization attached."""

    organization = OrganizationMinimalSerializer(read_only=True)

    class Meta:
        model = Branch
        fields = ['id', 'name', 'code', 'organization']
        read_only_fields = fields


class ActiveOrganizationInputSerializer(serializers.Serializer):
    """Validate input for selecting the active organization."""

    organization_id = serializers.IntegerField(min_value=1)

    def validate_organization_id(self, value):
        if not Organization.objects.filter(id=value).exists():
            raise serializers.ValidationError('Organization not found.')
        return value
