from rest_framework import serializers
from .models import PointsRule


class PointsRuleSerializer(serializers.ModelSerializer):
    """Read-only representation of a points rule."""

    organization_name = serializers.CharField(source='organization.name', read_only=True, default=None)
    branch_name = serializers.CharField(source='branch.name', read_only=True, default=None)
    category_name = serializers.CharField(source='category.name', read_only=True, default=None)

    class Meta:
        model = PointsRule
        fields = [
            'id',
            'name',
            'description',
            'rule_type',
            'config',
            'is_active',
            'is_default',
            'priority',
            'organization',
            'organization_name',
            'branch',
            'branch_name',
            'category',
            'category_name',
            'start_date',
            'end_date',
            'valid_from',
            'valid_until',
            'days_of_week',
            'time_start',
            'time_end',
            'display_name',
            'display_icon',
            'display_color',
            'show_in_app',
            'created_at',
        ]
        read_only_fields = fields


class PointsCalculationInputSerializer(serializers.Serializer):
    """
    Validate input for the points preview.

    Fields:
        amount (decimal): Purchase amount to evaluate
        organization_id (int): Optional, defaults to the active organization
        branch_id (int): Optional branch scope
        category_id (int): Optional category scope
    """

    amount = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0)
    organization_id = serializers.IntegerField(required=False, allow_null=True, min_value=1)
    branch_id = serializers.IntegerField(required=False, allow_null=True, min_value=1)
    category_id = serializers.IntegerField(required=False, allow_null=True, min_value=1)
