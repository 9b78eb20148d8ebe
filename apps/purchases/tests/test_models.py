import pytest
from decimal import Decimal
from unittest.mock import patch
from django.db import IntegrityError
from apps.purchases.models import Purchase, PURCHASE_NUMBER_ATTEMPTS


def _new_purchase(beneficiary, cashier, branch):
    return Purchase(
        beneficiary=beneficiary,
        cashier=cashier,
        branch=branch,
        total_amount=Decimal('1.00'),
        points_earned=0,
    )


@pytest.mark.django_db
class TestPurchaseNumber:
    """Tests for purchase number generation."""

    def test_collision_is_retried(self, purchase, beneficiary, cashier, branch):
        new = _new_purchase(beneficiary, cashier, branch)

        with patch.object(
            Purchase, '_generate_purchase_number',
            side_effect=[purchase.purchase_number, 'P20261018-ABC123'],
        ):
            new.save()

        assert new.pk is not None
        assert new.purchase_number == 'P20261018-ABC123'
        assert Purchase.objects.count() == 2

    def test_gives_up_after_repeated_collisions(self, purchase, beneficiary, cashier, branch):
        new = _new_purchase(beneficiary, cashier, branch)

        with patch.object(
            Purchase, '_generate_purchase_number',
            return_value=purchase.purchase_number,
        ) as generate:
            with pytest.raises(IntegrityError):
                new.save()

        assert generate.call_count == PURCHASE_NUMBER_ATTEMPTS
        assert Purchase.objects.count() == 1

    def test_existing_number_is_kept(self, purchase):
        number = purchase.purchase_number
        purchase.notes = 'corrected'
        purchase.save()

        purchase.refresh_from_db()
        assert purchase.purchase_number == number
