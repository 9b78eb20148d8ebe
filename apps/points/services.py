"""
Points services: rule listing and calculation preview.

Both functions return ``{'success': bool, ...}`` dictionaries so dashboard
callers only branch on ``success``.
"""

import logging
from decimal import Decimal
from typing import Optional

from django.db import DatabaseError
from django.db.models import Q
from django.utils import timezone

from .evaluators import PointsDimensions, get_points_evaluator
from .exceptions import PointsServiceError
from .models import PointsRule


logger = logging.getLogger(__name__)


def get_active_points_rules(*, organization_id: Optional[int] = None):
    """
    List active rules, newest first.

    When an organization is given, only rules scoped to it (or unscoped
    rules) are returned.
    """
    try:
        queryset = PointsRule.objects.filter(is_active=True).select_related(
            'organization', 'branch', 'category'
        ).order_by('-created_at')
        if organization_id is not None:
            queryset = queryset.filter(
                Q(organization_id=organization_id) | Q(organization__isnull=True)
            )
        return {'success': True, 'data': list(queryset)}
    except DatabaseError as e:
        logger.error("points_rules_fetch_failed", extra={'error': str(e)})
        return {'success': False, 'error': str(e)}


def calculate_points_preview(
    *,
    amount: Decimal,
    organization_id: Optional[int] = None,
    branch_id: Optional[int] = None,
    category_id: Optional[int] = None,
    timestamp=None
):
    """
    Evaluate the configured rules for an amount without recording anything.

    Returns:
        dict: ``{'success': True, 'points': int}`` (0 when no rule applies)
        or ``{'success': False, 'error': str}``.
    """
    timestamp = timestamp or timezone.now()
    dimensions = PointsDimensions(
        organization_id=organization_id,
        branch_id=branch_id,
        category_id=category_id,
    )
    try:
        points = get_points_evaluator().evaluate(amount, dimensions, timestamp)
    except Exception as e:
        logger.error(
            "points_preview_failed",
            extra={'amount': str(amount), 'organization_id': organization_id, 'error': str(e)},
        )
        if isinstance(e, PointsServiceError):
            return {'success': False, 'error': str(e)}
        return {'success': False, 'error': 'Failed to calculate points'}

    return {'success': True, 'points': points or 0}
