import pytest
from datetime import datetime
from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from apps.beneficiaries.models import Beneficiary
from apps.purchases.services import create_purchase


@pytest.mark.django_db
class TestBeneficiaryList:
    """Tests for GET /api/beneficiaries/"""

    def test_list_beneficiaries(self, staff_client, beneficiary, other_beneficiary):
        url = reverse('beneficiaries:beneficiary-list')
        response = staff_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['count'] == 2
        names = [b['full_name'] for b in response.data['results']]
        assert names == ['Ana Lopez', 'Ben Okafor']

    def test_list_unauthenticated(self, api_client):
        url = reverse('beneficiaries:beneficiary-list')
        response = api_client.get(url)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_beneficiaries_are_read_only(self, staff_client, beneficiary):
        url = reverse('beneficiaries:beneficiary-detail', kwargs={'pk': beneficiary.id})
        response = staff_client.patch(url, {'available_points': 1000}, format='json')

        assert response.status_code == status.HTTP_405_METHOD_NOT_ALLOWED
        beneficiary.refresh_from_db()
        assert beneficiary.available_points == 10


@pytest.mark.django_db
class TestBeneficiaryRetrieve:
    """Tests for GET /api/beneficiaries/{id}/"""

    def test_retrieve_beneficiary(self, staff_client, beneficiary):
        url = reverse('beneficiaries:beneficiary-detail', kwargs={'pk': beneficiary.id})
        response = staff_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['email'] == 'ana@example.com'
        assert response.data['available_points'] == 10


@pytest.mark.django_db
class TestBeneficiaryPurchases:
    """Tests for GET /api/beneficiaries/{id}/purchases/"""

    def test_purchase_history_newest_first(self, staff_client, beneficiary, record_purchase):
        older = record_purchase(
            beneficiary, '5.00', 5,
            purchase_date=timezone.make_aware(datetime(2026, 1, 1, 9, 0)),
        )
        newer = record_purchase(
            beneficiary, '8.00', 8,
            purchase_date=timezone.make_aware(datetime(2026, 2, 1, 9, 0)),
        )

        url = reverse('beneficiaries:beneficiary-purchases', kwargs={'pk': beneficiary.id})
        response = staff_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['success'] is True
        assert [p['id'] for p in response.data['data']] == [newer.id, older.id]

        latest = response.data['data'][0]
        assert latest['cashier_name'] == 'Sam Staff'
        assert latest['branch_name'] == 'Central'
        assert latest['items'][0]['item_name'] == 'Coffee'

    def test_history_excludes_other_beneficiaries(self, staff_client, beneficiary, other_beneficiary, record_purchase):
        record_purchase(other_beneficiary)

        url = reverse('beneficiaries:beneficiary-purchases', kwargs={'pk': beneficiary.id})
        response = staff_client.get(url)

        assert response.data['data'] == []

    def test_history_unknown_beneficiary(self, staff_client):
        url = reverse('beneficiaries:beneficiary-purchases', kwargs={'pk': 999999})
        response = staff_client.get(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.django_db
class TestBalanceCredit:
    """Inserting a purchase credits the beneficiary balance."""

    def test_purchase_insert_credits_points(self, beneficiary, record_purchase):
        record_purchase(beneficiary, '30.00', 30)

        beneficiary.refresh_from_db()
        assert beneficiary.available_points == 40

    def test_zero_point_purchase_leaves_balance(self, beneficiary, record_purchase):
        record_purchase(beneficiary, '30.00', 0)

        beneficiary.refresh_from_db()
        assert beneficiary.available_points == 10

    def test_updating_purchase_does_not_credit_again(self, beneficiary, record_purchase):
        purchase = record_purchase(beneficiary, '30.00', 30)
        purchase.notes = 'corrected'
        purchase.save()

        assert Beneficiary.objects.get(id=beneficiary.id).available_points == 40

    def test_balance_listing_refreshes_after_purchase(
        self, staff_client, staff_user, beneficiary, branch
    ):
        """The listing cache is invalidated by the purchase workflow."""
        url = reverse('beneficiaries:beneficiary-list')
        assert staff_client.get(url).data['results'][0]['available_points'] == 10

        class TenPoints:
            def evaluate(self, amount, dimensions, timestamp):
                return 10

        result = create_purchase(
            beneficiary_id=beneficiary.id,
            cashier_id=staff_user.id,
            branch_id=branch.id,
            items=[{'item_name': 'Coffee', 'quantity': 1, 'unit_price': '3.00'}],
            evaluator=TenPoints(),
        )

        assert result['success'] is True
        assert staff_client.get(url).data['results'][0]['available_points'] == 20


@pytest.mark.django_db
class TestBeneficiaryVerify:
    """Tests for POST /api/beneficiaries/verify/"""

    def test_verify_by_email(self, staff_client, beneficiary):
        url = reverse('beneficiaries:beneficiary-verify')
        response = staff_client.post(url, {'email': 'ana@example.com'}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data == {
            'success': True,
            'data': {
                'id': beneficiary.id,
                'first_name': 'Ana',
                'last_name': 'Lopez',
                'email': 'ana@example.com',
                'phone': '',
                'available_points': 10,
            },
        }

    def test_email_required(self, staff_client):
        url = reverse('beneficiaries:beneficiary-verify')
        response = staff_client.post(url, {}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['success'] is False
        assert response.data['error_code'] == 'validation_error'
        assert 'email' in response.data['details']

    def test_unknown_email(self, staff_client, beneficiary):
        url = reverse('beneficiaries:beneficiary-verify')
        response = staff_client.post(url, {'email': 'nobody@example.com'}, format='json')

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data == {
            'success': False,
            'error': 'Beneficiary not found',
            'error_code': 'not_found',
        }

    def test_shared_email_is_not_a_match(self, staff_client, beneficiary):
        Beneficiary.objects.create(first_name='Ana', last_name='Ruiz', email='ana@example.com')

        url = reverse('beneficiaries:beneficiary-verify')
        response = staff_client.post(url, {'email': 'ana@example.com'}, format='json')

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_unauthenticated(self, api_client):
        url = reverse('beneficiaries:beneficiary-verify')
        response = api_client.post(url, {'email': 'ana@example.com'}, format='json')

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
