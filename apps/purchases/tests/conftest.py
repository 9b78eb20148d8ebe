import pytest
from decimal import Decimal
from django.core.cache import cache
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.beneficiaries.models import Beneficiary
from apps.organizations.models import Organization, Branch
from apps.points.models import PointsRule, RuleType
from apps.purchases.models import Purchase, PurchaseItem


class FixedPointsEvaluator:
    """Evaluator double returning a fixed award and recording its calls."""

    def __init__(self, points):
        self.points = points
        self.calls = []

    def evaluate(self, amount, dimensions, timestamp):
        self.calls.append((amount, dimensions, timestamp))
        return self.points


class FailingPointsEvaluator:
    """Evaluator double that fails like an unreachable remote service."""

    def evaluate(self, amount, dimensions, timestamp):
        raise ConnectionError('points service unavailable')


@pytest.fixture(autouse=True)
def clear_listing_cache():
    """Listing versions live in the process-wide cache."""
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def organization(db):
    return Organization.objects.create(name='North Market', business_name='North Market Ltd.')


@pytest.fixture
def other_organization(db):
    return Organization.objects.create(name='South Grocers')


@pytest.fixture
def branch(organization):
    return Branch.objects.create(organization=organization, name='Central', code='N-01')


@pytest.fixture
def other_branch(other_organization):
    return Branch.objects.create(organization=other_organization, name='Plaza', code='S-01')


@pytest.fixture
def cashier(db, organization):
    """Create and return a staff user recording purchases."""
    return User.objects.create_user(
        email='cashier@example.com',
        password='TestPass123!',
        first_name='Carla',
        last_name='Cashier',
        organization=organization,
    )


@pytest.fixture
def cashier_client(api_client, cashier):
    """Return API client authenticated as the cashier."""
    refresh = RefreshToken.for_user(cashier)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client


@pytest.fixture
def beneficiary(db):
    return Beneficiary.objects.create(
        first_name='Ana',
        last_name='Lopez',
        email='ana@example.com',
        available_points=100,
    )


@pytest.fixture
def cart():
    """Two-line cart totalling 25.00."""
    return [
        {'item_name': 'Widget', 'quantity': 2, 'unit_price': Decimal('10.00')},
        {'item_name': 'Gadget', 'quantity': 1, 'unit_price': Decimal('5.00')},
    ]


@pytest.fixture
def default_rule(db):
    """One point per currency unit, everywhere, always."""
    return PointsRule.objects.create(
        name='Base rate',
        rule_type=RuleType.FIXED_AMOUNT,
        config={'points_per_dollar': 1},
        is_default=True,
    )


def _insert_purchase(beneficiary, cashier, branch, total, points=0, **kwargs):
    purchase = Purchase.objects.create(
        beneficiary=beneficiary,
        cashier=cashier,
        branch=branch,
        total_amount=Decimal(total),
        points_earned=points,
        **kwargs
    )
    PurchaseItem.objects.create(
        purchase=purchase,
        item_name='Item',
        quantity=1,
        unit_price=Decimal(total),
        subtotal=Decimal(total),
        points_earned=points,
    )
    return purchase


@pytest.fixture
def purchase(beneficiary, cashier, branch):
    return _insert_purchase(beneficiary, cashier, branch, '12.50', points=12)


@pytest.fixture
def other_purchase(beneficiary, cashier, other_branch):
    return _insert_purchase(beneficiary, cashier, other_branch, '40.00', points=40)


@pytest.fixture
def purchase_factory(db):
    """Insert purchase rows directly, bypassing the workflow."""
    return _insert_purchase


@pytest.fixture
def fixed_evaluator():
    """Evaluator awarding 25 points; set ``.points`` to change it."""
    return FixedPointsEvaluator(25)


@pytest.fixture
def failing_evaluator():
    return FailingPointsEvaluator()
