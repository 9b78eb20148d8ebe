from decimal import Decimal

from rest_framework import serializers
from .models import Purchase, PurchaseItem
from apps.accounts.models import User
from apps.beneficiaries.serializers import BeneficiaryMinimalSerializer
from apps.organizations.serializers import BranchMinimalSerializer, BranchDetailSerializer


AMOUNT_ONLY_ITEM_NAME = 'Purchase'


# =============================================================================
# Input Serializers
# =============================================================================

class PurchaseItemInputSerializer(serializers.Serializer):
    """One cart line."""

    item_name = serializers.CharField(max_length=200)
    quantity = serializers.IntegerField(min_value=1)
    unit_price = serializers.DecimalField(
        max_digits=12,
        decimal_places=2,
        min_value=Decimal('0.00')
    )


class PurchaseCreateInputSerializer(serializers.Serializer):
    """
    Validate input for recording a purchase.

    Fields:
        beneficiary_id (int): Customer earning the points
        branch_id (int): Branch where the purchase happened
        items (list): Cart lines, or
        amount (decimal): Total for a purchase recorded without items
        notes (str): Optional free text

    The cashier is the authenticated user. When ``amount`` is given it is
    recorded as a single "Purchase" line and any ``items`` are ignored.
    """

    beneficiary_id = serializers.IntegerField(min_value=1)
    branch_id = serializers.IntegerField(min_value=1)
    items = PurchaseItemInputSerializer(many=True, required=False)
    amount = serializers.DecimalField(
        max_digits=12,
        decimal_places=2,
        required=False,
        allow_null=True
    )
    notes = serializers.CharField(required=False, allow_blank=True, default='')

    def validate_amount(self, value):
        if value is not None and value <= 0:
            raise serializers.ValidationError('Invalid purchase amount')
        return value

    def validate(self, attrs):
        items = attrs.get('items')
        amount = attrs.pop('amount', None)

        if amount is not None:
            attrs['items'] = [{
                'item_name': AMOUNT_ONLY_ITEM_NAME,
                'quantity': 1,
                'unit_price': amount,
            }]
        elif items is not None:
            attrs['items'] = [dict(item) for item in items]
        else:
            raise serializers.ValidationError({
                'items': 'Either amount or items array is required'
            })

        return attrs


class PurchaseFilterSerializer(serializers.Serializer):
    """
    Validate query parameters for purchase filtering.

    Query Parameters:
        branch_id (int): Filter by branch
        organization_id (int): Filter by the branch's organization
        start_date (date): Purchases on or after this day
        end_date (date): Purchases on or before this day
    """

    branch_id = serializers.IntegerField(required=False, min_value=1)
    organization_id = serializers.IntegerField(required=False, min_value=1)
    start_date = serializers.DateField(required=False)
    end_date = serializers.DateField(required=False)

    def validate(self, attrs):
        """Validate date range."""
        start_date = attrs.get('start_date')
        end_date = attrs.get('end_date')

        if start_date and end_date:
            if start_date > end_date:
                raise serializers.ValidationError({
                    'end_date': 'End date must be after start date'
                })

        return attrs


# =============================================================================
# Output Serializers
# =============================================================================

class CashierMinimalSerializer(serializers.ModelSerializer):
    """Minimal staff info for nested serialization."""

    full_name = serializers.CharField(source='get_full_name', read_only=True)

    class Meta:
        model = User
        fields = ['id', 'email', 'full_name']
        read_only_fields = fields


class PurchaseItemSerializer(serializers.ModelSerializer):
    """Serializer for purchase line items."""

    class Meta:
        model = PurchaseItem
        fields = [
            'id',
            'item_name',
            'quantity',
            'unit_price',
            'subtotal',
            'points_earned',
        ]
        read_only_fields = fields


class PurchaseListSerializer(serializers.ModelSerializer):
    """Lightweight serializer for purchase lists."""

    beneficiary = BeneficiaryMinimalSerializer(read_only=True)
    cashier = CashierMinimalSerializer(read_only=True)
    branch = BranchMinimalSerializer(read_only=True)

    class Meta:
        model = Purchase
        fields = [
            'id',
            'purchase_number',
            'purchase_date',
            'beneficiary',
            'cashier',
            'branch',
            'total_amount',
            'points_earned',
            'notes',
        ]
        read_only_fields = fields


class PurchaseDetailSerializer(PurchaseListSerializer):
    """Purchase with its branch organization and line items."""

    branch = BranchDetailSerializer(read_only=True)
    items = PurchaseItemSerializer(many=True, read_only=True)

    class Meta(PurchaseListSerializer.Meta):
        fields = PurchaseListSerializer.Meta.fields + ['items']
        read_only_fields = fields


class BeneficiaryPurchaseSerializer(serializers.ModelSerializer):
    """Purchase as shown in a beneficiary's history."""

    cashier_name = serializers.CharField(source='cashier.get_full_name', read_only=True)
    branch_name = serializers.CharField(source='branch.name', read_only=True)
    items = PurchaseItemSerializer(many=True, read_only=True)

    class Meta:
        model = Purchase
        fields = [
            'id',
            'purchase_number',
            'purchase_date',
            'cashier_name',
            'branch_name',
            'total_amount',
            'points_earned',
            'notes',
            'items',
        ]
        read_only_fields = fields
