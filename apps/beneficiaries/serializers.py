from rest_framework import serializers
from .models import Beneficiary


class BeneficiaryMinimalSerializer(serializers.ModelSerializer):
    """Minimal beneficiary info for nested serialization."""

    full_name = serializers.CharField(source='get_full_name', read_only=True)

    class Meta:
        model = Beneficiary
        fields = ['id', 'full_name', 'email']
        read_only_fields = fields


class BeneficiarySerializer(serializers.ModelSerializer):
    """Beneficiary with its current points balance."""

    full_name = serializers.CharField(source='get_full_name', read_only=True)

    class Meta:
        model = Beneficiary
        fields = [
            'id',
            'first_name',
            'last_name',
            'full_name',
            'email',
            'phone',
            'document_id',
            'available_points',
            'registration_date',
        ]
        read_only_fields = fields


class BeneficiaryVerifyInputSerializer(serializers.Serializer):
    """Email the cashier looks the customer up by."""

    email = serializers.EmailField(max_length=255)


class BeneficiaryVerifySerializer(serializers.ModelSerializer):
    """Beneficiary as confirmed at the counter."""

    class Meta:
        model = Beneficiary
        fields = [
            'id',
            'first_name',
            'last_name',
            'email',
            'phone',
            'available_points',
        ]
        read_only_fields = fields
