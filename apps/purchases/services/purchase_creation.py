"""
Purchase creation service.

Turns a cashier's cart into a purchase with its points accounted for:

1. Validate the request (no writes on failure)
2. Total the items with exact decimal arithmetic
3. Resolve the branch's organization
4. Ask the points evaluator for the award
5. Insert the purchase header
6. Insert the line items with the award apportioned across them
7. Read back the beneficiary balance (best effort)

Steps 5 and 6 are separate writes. Unless ``PURCHASE_ATOMIC_CREATE`` is
enabled, a failed item insert leaves the header committed without items and
the operation reports failure; nothing is deleted to compensate.
"""

import logging
from collections.abc import Mapping
from contextlib import nullcontext
from decimal import Decimal, InvalidOperation
from typing import Optional

from django.conf import settings
from django.db import transaction, DatabaseError
from django.utils import timezone

from apps.beneficiaries.models import Beneficiary
from apps.organizations.models import Branch
from apps.points.evaluators import PointsDimensions, get_points_evaluator
from apps.purchases.cache import (
    BENEFICIARIES_LISTING,
    PURCHASES_LISTING,
    invalidate_listings,
)
from apps.purchases.models import Purchase, PurchaseItem

from .exceptions import (
    PurchaseServiceError,
    PurchaseValidationError,
    BranchNotFoundError,
    PointsCalculationError,
    PurchasePersistenceError,
    PurchaseItemsPersistenceError,
)


logger = logging.getLogger(__name__)

CENT = Decimal('0.01')


def create_purchase(
    *,
    beneficiary_id: int,
    cashier_id: int,
    branch_id: int,
    items: list,
    notes: Optional[str] = None,
    evaluator=None,
    atomic: Optional[bool] = None
) -> dict:
    """
    Record a purchase and award its points.

    Args:
        beneficiary_id: Customer earning the points
        cashier_id: Staff member recording the purchase
        branch_id: Branch where the purchase happened
        items: Non-empty list of ``{'item_name', 'quantity', 'unit_price'}``
        notes: Optional free text
        evaluator: PointsEvaluator to use (default: POINTS_EVALUATOR_CLASS)
        atomic: Write header and items in one transaction
            (default: PURCHASE_ATOMIC_CREATE)

    Returns:
        On success::

            {'success': True, 'purchase_id': 12, 'purchase_number': 'P20261018-3FA2C1',
             'total_amount': Decimal('25.00'), 'points_earned': 25,
             'beneficiary_new_balance': 140}

        On failure::

            {'success': False, 'error': 'Branch not found', 'error_code': 'not_found'}

        ``error_code`` is one of ``validation_error``, ``not_found``,
        ``dependency_error``, ``persistence_error``, ``unexpected_error``.
        This function never raises.
    """
    try:
        cleaned_items = validate_purchase_input(
            beneficiary_id=beneficiary_id,
            cashier_id=cashier_id,
            branch_id=branch_id,
            items=items,
        )
        total_amount = calculate_total_amount(cleaned_items)
        timestamp = timezone.now()

        organization_id = _resolve_organization_id(branch_id)

        points_earned = _evaluate_points(
            evaluator,
            total_amount,
            PointsDimensions(
                organization_id=organization_id,
                branch_id=branch_id,
                category_id=None,
                item_count=sum(item['quantity'] for item in cleaned_items),
            ),
            timestamp,
        )

        if atomic is None:
            atomic = getattr(settings, 'PURCHASE_ATOMIC_CREATE', False)

        with transaction.atomic() if atomic else nullcontext():
            purchase = _insert_purchase(
                beneficiary_id=beneficiary_id,
                cashier_id=cashier_id,
                branch_id=branch_id,
                total_amount=total_amount,
                points_earned=points_earned,
                notes=notes,
                purchase_date=timestamp,
            )
            _insert_items(purchase, cleaned_items, total_amount, points_earned, atomic)

        balance = _read_beneficiary_balance(beneficiary_id)
        invalidate_listings(PURCHASES_LISTING, BENEFICIARIES_LISTING)

    except PurchaseServiceError as e:
        return {'success': False, 'error': str(e), 'error_code': e.code}
    except Exception:
        logger.exception(
            "purchase_create_unexpected_error",
            extra={'beneficiary_id': beneficiary_id, 'branch_id': branch_id},
        )
        error = PurchaseServiceError()
        return {'success': False, 'error': str(error), 'error_code': error.code}

    logger.info(
        "purchase_created",
        extra={
            'purchase_id': purchase.id,
            'purchase_number': purchase.purchase_number,
            'branch_id': branch_id,
            'total_amount': str(total_amount),
            'points_earned': points_earned,
        },
    )

    return {
        'success': True,
        'purchase_id': purchase.id,
        'purchase_number': purchase.purchase_number,
        'total_amount': purchase.total_amount,
        'points_earned': purchase.points_earned,
        'beneficiary_new_balance': balance,
    }


def validate_purchase_input(*, beneficiary_id, cashier_id, branch_id, items):
    """
    Check a purchase request and normalize its items.

    Returns:
        list[dict]: Items with ``unit_price`` as a 2-place Decimal.

    Raises:
        PurchaseValidationError: On the first problem found.
    """
    if not beneficiary_id or not cashier_id or not branch_id:
        raise PurchaseValidationError(
            "Missing required fields: beneficiary_id, cashier_id, or branch_id"
        )

    if not items:
        raise PurchaseValidationError("At least one item is required")

    cleaned = []
    for item in items:
        cleaned_item = _clean_item(item)
        if cleaned_item is None:
            raise PurchaseValidationError("Invalid item data")
        cleaned.append(cleaned_item)

    return cleaned


def _clean_item(item):
    if not isinstance(item, Mapping):
        return None

    name = item.get('item_name')
    if not isinstance(name, str) or not name.strip():
        return None

    quantity = item.get('quantity')
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
        return None

    unit_price = item.get('unit_price')
    if unit_price is None or isinstance(unit_price, bool):
        return None
    try:
        unit_price = Decimal(str(unit_price))
    except (InvalidOperation, ValueError):
        return None
    # Prices are stored with 2 decimal places; anything finer would drift
    if not unit_price.is_finite() or unit_price < 0 or unit_price != unit_price.quantize(CENT):
        return None

    return {
        'item_name': name.strip(),
        'quantity': quantity,
        'unit_price': unit_price.quantize(CENT),
    }


def calculate_total_amount(items):
    """Exact sum of ``quantity * unit_price``."""
    return sum(
        (item['quantity'] * item['unit_price'] for item in items),
        Decimal('0.00')
    )


def apportion_points(subtotal, total_amount, points_earned):
    """
    Share of the purchase points for one line.

    ``floor(subtotal * points_earned / total_amount)``; the floor means the
    items together never exceed the purchase award.
    """
    if total_amount <= 0 or not points_earned:
        return 0
    return int((subtotal * points_earned) // total_amount)


def _resolve_organization_id(branch_id):
    try:
        return Branch.objects.values_list('organization_id', flat=True).get(pk=branch_id)
    except (Branch.DoesNotExist, ValueError, TypeError):
        raise BranchNotFoundError()


def _evaluate_points(evaluator, amount, dimensions, timestamp):
    try:
        evaluator = evaluator or get_points_evaluator()
        points = evaluator.evaluate(amount, dimensions, timestamp)
    except Exception as e:
        logger.error(
            "points_calculation_failed",
            extra={
                'amount': str(amount),
                'organization_id': dimensions.organization_id,
                'branch_id': dimensions.branch_id,
                'error': str(e),
            },
        )
        raise PointsCalculationError() from e

    if points is None:
        return 0
    if isinstance(points, bool) or not isinstance(points, int) or points < 0:
        logger.error(
            "points_calculation_invalid_result",
            extra={'amount': str(amount), 'result': repr(points)},
        )
        raise PointsCalculationError()
    return points


def _insert_purchase(
    *,
    beneficiary_id,
    cashier_id,
    branch_id,
    total_amount,
    points_earned,
    notes,
    purchase_date
):
    try:
        return Purchase.objects.create(
            beneficiary_id=beneficiary_id,
            cashier_id=cashier_id,
            branch_id=branch_id,
            total_amount=total_amount,
            points_earned=points_earned,
            notes=notes or '',
            purchase_date=purchase_date,
        )
    except DatabaseError as e:
        logger.error(
            "purchase_insert_failed",
            extra={'beneficiary_id': beneficiary_id, 'branch_id': branch_id, 'error': str(e)},
        )
        raise PurchasePersistenceError() from e


def _insert_items(purchase, items, total_amount, points_earned, atomic):
    purchase_items = []
    for item in items:
        subtotal = item['quantity'] * item['unit_price']
        purchase_items.append(PurchaseItem(
            purchase=purchase,
            item_name=item['item_name'],
            quantity=item['quantity'],
            unit_price=item['unit_price'],
            subtotal=subtotal,
            points_earned=apportion_points(subtotal, total_amount, points_earned),
        ))

    try:
        PurchaseItem.objects.bulk_create(purchase_items)
    except DatabaseError as e:
        # Without a transaction the header row stays behind with no items
        logger.error(
            "purchase_items_insert_failed",
            extra={
                'purchase_id': purchase.id,
                'purchase_number': purchase.purchase_number,
                'header_rolled_back': bool(atomic),
                'error': str(e),
            },
        )
        raise PurchaseItemsPersistenceError(purchase_id=purchase.id) from e


def _read_beneficiary_balance(beneficiary_id):
    try:
        balance = Beneficiary.objects.values_list(
            'available_points', flat=True
        ).get(pk=beneficiary_id)
    except (Beneficiary.DoesNotExist, DatabaseError) as e:
        logger.warning(
            "beneficiary_balance_read_failed",
            extra={'beneficiary_id': beneficiary_id, 'error': str(e)},
        )
        return 0
    return balance or 0
