import pytest
from datetime import datetime
from django.utils import timezone
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.organizations.models import Organization, Branch, Category
from apps.points.models import PointsRule, RuleType


# Sunday 18 October 2026, noon UTC
SUNDAY_NOON = timezone.make_aware(datetime(2026, 10, 18, 12, 0))


@pytest.fixture
def sunday_noon():
    return SUNDAY_NOON


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def staff_user(db):
    return User.objects.create_user(email='staff@example.com', password='TestPass123!')


@pytest.fixture
def staff_client(api_client, staff_user):
    """Return API client authenticated as staff."""
    refresh = RefreshToken.for_user(staff_user)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client


@pytest.fixture
def organization(db):
    return Organization.objects.create(name='North Market')


@pytest.fixture
def other_organization(db):
    return Organization.objects.create(name='South Grocers')


@pytest.fixture
def branch(organization):
    return Branch.objects.create(organization=organization, name='Central')


@pytest.fixture
def category(db):
    return Category.objects.create(name='Beverages')


@pytest.fixture
def rule_factory(db):
    """Create a points rule; defaults to one point per currency unit."""
    def _create(**kwargs):
        kwargs.setdefault('name', 'Rule')
        kwargs.setdefault('rule_type', RuleType.FIXED_AMOUNT)
        kwargs.setdefault('config', {'points_per_dollar': 1})
        return PointsRule.objects.create(**kwargs)
    return _create


@pytest.fixture
def default_rule(rule_factory):
    return rule_factory(name='Base rate', is_default=True)
