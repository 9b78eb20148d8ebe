"""Read-side accessors for purchases."""

import logging

from django.db import DatabaseError

from apps.organizations.context import parse_organization_id
from apps.purchases.models import Purchase

from .exceptions import PurchaseServiceError, PurchaseNotFoundError


logger = logging.getLogger(__name__)


def get_beneficiary_purchases(beneficiary_id) -> dict:
    """
    Purchase history of one beneficiary, newest first.

    Each purchase comes with its cashier, branch and items loaded.

    Returns:
        dict: ``{'success': True, 'data': [Purchase, ...]}`` or an error result.
    """
    try:
        purchases = list(
            Purchase.objects
            .filter(beneficiary_id=beneficiary_id)
            .select_related('cashier', 'branch')
            .prefetch_related('items')
            .order_by('-purchase_date')
        )
    except (DatabaseError, ValueError) as e:
        return _query_failure("beneficiary_purchases_query_failed", e, beneficiary_id=beneficiary_id)

    return {'success': True, 'data': purchases}


def get_all_purchases(filters=None, *, active_organization_id=None) -> dict:
    """
    Operator listing of purchases, newest first.

    Args:
        filters: Optional dict with ``branch_id``, ``organization_id``,
            ``start_date`` and ``end_date`` (inclusive calendar days).
        active_organization_id: Organization selected for the current
            request; used only when ``filters`` carries no organization.

    The organization scope is applied to the fetched rows, comparing each
    purchase's branch organization with the effective organization id.
    A non-numeric organization id means no organization scope.

    Returns:
        dict: ``{'success': True, 'data': [Purchase, ...]}`` or an error result.
    """
    filters = filters or {}

    organization_id = parse_organization_id(filters.get('organization_id'))
    if organization_id is None:
        organization_id = parse_organization_id(active_organization_id)

    try:
        queryset = (
            Purchase.objects
            .select_related('beneficiary', 'cashier', 'branch')
            .order_by('-purchase_date')
        )
        if filters.get('branch_id'):
            queryset = queryset.filter(branch_id=filters['branch_id'])
        if filters.get('start_date'):
            queryset = queryset.filter(purchase_date__date__gte=filters['start_date'])
        if filters.get('end_date'):
            queryset = queryset.filter(purchase_date__date__lte=filters['end_date'])

        purchases = list(queryset)
    except (DatabaseError, ValueError) as e:
        return _query_failure("purchases_query_failed", e, filters=filters)

    if organization_id is not None:
        purchases = [
            purchase for purchase in purchases
            if purchase.branch.organization_id == organization_id
        ]

    return {'success': True, 'data': purchases}


def get_purchase_by_id(purchase_id) -> dict:
    """
    One purchase with beneficiary, cashier, branch (and its organization)
    and items.

    Returns:
        dict: ``{'success': True, 'data': Purchase}``, or
        ``{'success': False, 'error': 'Purchase not found', 'error_code': 'not_found'}``.
    """
    try:
        purchase = (
            Purchase.objects
            .select_related('beneficiary', 'cashier', 'branch__organization')
            .prefetch_related('items')
            .get(pk=purchase_id)
        )
    except (Purchase.DoesNotExist, ValueError, TypeError):
        error = PurchaseNotFoundError()
        return {'success': False, 'error': str(error), 'error_code': error.code}
    except DatabaseError as e:
        return _query_failure("purchase_query_failed", e, purchase_id=purchase_id)

    return {'success': True, 'data': purchase}


def _query_failure(event, exc, **context):
    logger.error(event, extra={**context, 'error': str(exc)})
    error = PurchaseServiceError()
    return {'success': False, 'error': str(error), 'error_code': error.code}
