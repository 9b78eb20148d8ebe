import pytest
from decimal import Decimal
from django.core.cache import cache
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.beneficiaries.models import Beneficiary
from apps.organizations.models import Organization, Branch
from apps.purchases.models import Purchase, PurchaseItem


@pytest.fixture(autouse=True)
def clear_listing_cache():
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def staff_user(db):
    return User.objects.create_user(
        email='staff@example.com',
        password='TestPass123!',
        first_name='Sam',
        last_name='Staff',
    )


@pytest.fixture
def staff_client(api_client, staff_user):
    """Return API client authenticated as staff."""
    refresh = RefreshToken.for_user(staff_user)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client


@pytest.fixture
def branch(db):
    organization = Organization.objects.create(name='North Market')
    return Branch.objects.create(organization=organization, name='Central')


@pytest.fixture
def beneficiary(db):
    return Beneficiary.objects.create(
        first_name='Ana',
        last_name='Lopez',
        email='ana@example.com',
        available_points=10,
    )


@pytest.fixture
def other_beneficiary(db):
    return Beneficiary.objects.create(first_name='Ben', last_name='Okafor')


@pytest.fixture
def record_purchase(staff_user, branch):
    """Insert a purchase row with one item for a beneficiary."""
    def _record(beneficiary, total='10.00', points=10, **kwargs):
        purchase = Purchase.objects.create(
            beneficiary=beneficiary,
            cashier=staff_user,
            branch=branch,
            total_amount=Decimal(total),
            points_earned=points,
            **kwargs
        )
        PurchaseItem.objects.create(
            purchase=purchase,
            item_name='Coffee',
            quantity=1,
            unit_price=Decimal(total),
            subtotal=Decimal(total),
            points_earned=points,
        )
        return purchase
    return _record
