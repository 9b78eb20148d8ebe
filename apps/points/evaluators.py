"""
Points Evaluators
=================

A ``PointsEvaluator`` maps a purchase amount and its context (organization,
branch, category) at a given moment to an integer point award. The purchase
workflow only depends on that numeric contract, so the rule engine behind it
can be swapped through the ``POINTS_EVALUATOR_CLASS`` setting.

Classes:
    PointsDimensions: The context a purchase is evaluated in.
    PointsEvaluator: Strategy interface.
    RuleBasedPointsEvaluator: Default evaluator over ``PointsRule`` rows.

Example:
    Evaluating a purchase::

        from apps.points.evaluators import PointsDimensions, get_points_evaluator

        evaluator = get_points_evaluator()
        points = evaluator.evaluate(
            Decimal('25.00'),
            PointsDimensions(organization_id=7, branch_id=3),
            timezone.now(),
        )
        # None when no rule applies
"""

import math
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import NamedTuple, Optional

from django.conf import settings
from django.db.models import Q
from django.utils import timezone
from django.utils.module_loading import import_string

from .exceptions import PointsEvaluationError, EvaluatorConfigurationError
from .models import PointsRule, RuleType


DEFAULT_EVALUATOR_CLASS = 'apps.points.evaluators.RuleBasedPointsEvaluator'


class PointsDimensions(NamedTuple):
    """Context a purchase amount is evaluated in. ``None`` means unknown."""

    organization_id: Optional[int] = None
    branch_id: Optional[int] = None
    category_id: Optional[int] = None
    item_count: int = 1


class PointsEvaluator:
    """
    Strategy interface for point calculation.

    Implementations may call out to a remote service; any exception they
    raise is treated by callers as a failed calculation.
    """

    def evaluate(
        self,
        amount: Decimal,
        dimensions: PointsDimensions,
        timestamp: datetime
    ) -> Optional[int]:
        """Return the points earned, or None when no rule applies."""
        raise NotImplementedError


class RuleBasedPointsEvaluator(PointsEvaluator):
    """
    Evaluate the best eligible ``PointsRule``.

    Candidate rules are active and scoped to the given organization, branch
    and category (or unscoped). A candidate is eligible when every time gate
    it defines contains the timestamp. Among eligible rules, time-gated
    (non-default) rules win over default rules, then higher priority, then
    the more specific scope, then the newest rule.
    """

    def evaluate(self, amount, dimensions, timestamp):
        amount = _to_decimal(amount, 'amount')
        if amount < 0:
            raise PointsEvaluationError(f"Amount must not be negative: {amount}")

        rule = self.select_rule(dimensions, timestamp)
        if rule is None:
            return None

        return apply_rule(rule, amount, dimensions.item_count)

    def select_rule(self, dimensions, timestamp):
        """Return the winning rule for this context, or None."""
        candidates = PointsRule.objects.filter(is_active=True).filter(
            _scope_filter('organization_id', dimensions.organization_id),
            _scope_filter('branch_id', dimensions.branch_id),
            _scope_filter('category_id', dimensions.category_id),
        )

        local_time = timezone.localtime(timestamp) if timezone.is_aware(timestamp) else timestamp
        eligible = [rule for rule in candidates if is_rule_eligible(rule, local_time)]
        if not eligible:
            return None

        return max(eligible, key=_rule_rank)


def _scope_filter(field, value):
    if value is None:
        return Q(**{f'{field}__isnull': True})
    return Q(**{f'{field}__isnull': True}) | Q(**{field: value})


def _rule_rank(rule):
    specificity = sum(
        1 for value in (rule.organization_id, rule.branch_id, rule.category_id)
        if value is not None
    )
    return (not rule.is_default, rule.priority, specificity, rule.created_at, rule.pk)


def _js_weekday(moment):
    # 0 = Sunday ... 6 = Saturday
    return (moment.weekday() + 1) % 7


def is_rule_eligible(rule, moment):
    """Check the date, validity, weekday and time-of-day gates of a rule."""
    if rule.is_default:
        return True

    if rule.start_date and moment.date() < rule.start_date:
        return False
    if rule.end_date and moment.date() > rule.end_date:
        return False

    if rule.valid_from and moment < rule.valid_from:
        return False
    if rule.valid_until and moment > rule.valid_until:
        return False

    if rule.days_of_week:
        if _js_weekday(moment) not in {int(day) for day in rule.days_of_week}:
            return False

    if rule.time_start or rule.time_end:
        current = moment.time()
        start = rule.time_start
        end = rule.time_end
        if start and end and start > end:
            # Overnight window, e.g. 22:00 - 02:00
            if not (current >= start or current <= end):
                return False
        else:
            if start and current < start:
                return False
            if end and current > end:
                return False

    return True


def apply_rule(rule, amount, item_count=1):
    """Compute the floor point award of one rule for an amount."""
    config = rule.config or {}

    if rule.rule_type == RuleType.FIXED_AMOUNT:
        rate = _config_value(config, 'points_per_dollar')
        return _floor_points(amount * rate)

    if rule.rule_type == RuleType.PERCENTAGE:
        percentage = _config_value(config, 'percentage')
        return _floor_points(amount * percentage / Decimal(100))

    if rule.rule_type == RuleType.FIXED_PER_ITEM:
        per_item = _config_value(config, 'points_per_item')
        return _floor_points(per_item * Decimal(item_count))

    if rule.rule_type == RuleType.TIERED:
        return _apply_tiers(config.get('tiers'), amount)

    raise PointsEvaluationError(f"Unknown rule type: {rule.rule_type}")


def _apply_tiers(tiers, amount):
    if not tiers or not isinstance(tiers, list):
        raise PointsEvaluationError("Tiered rule requires a non-empty 'tiers' list")

    matched = None
    for tier in tiers:
        if not isinstance(tier, dict):
            raise PointsEvaluationError(f"Invalid tier: {tier!r}")
        min_amount = _to_decimal(tier.get('min_amount', 0), 'min_amount')
        if min_amount <= amount and (matched is None or min_amount >= matched[0]):
            matched = (min_amount, tier)

    if matched is None:
        return 0

    tier = matched[1]
    if 'points' in tier:
        return _floor_points(_to_decimal(tier['points'], 'points'))
    return _floor_points(amount * _config_value(tier, 'points_per_dollar'))


def _config_value(config, key):
    if key not in config:
        raise PointsEvaluationError(f"Rule config is missing '{key}'")
    return _to_decimal(config[key], key)


def _to_decimal(value, name):
    if isinstance(value, bool):
        raise PointsEvaluationError(f"Invalid {name}: {value!r}")
    try:
        return Decimal(str(value))
    except (InvalidOperation, TypeError, ValueError):
        raise PointsEvaluationError(f"Invalid {name}: {value!r}")


def _floor_points(value):
    return max(0, math.floor(value))


def get_points_evaluator():
    """Instantiate the evaluator named by POINTS_EVALUATOR_CLASS."""
    path = getattr(settings, 'POINTS_EVALUATOR_CLASS', DEFAULT_EVALUATOR_CLASS)
    try:
        evaluator_class = import_string(path)
    except ImportError as e:
        raise EvaluatorConfigurationError(f"Cannot import points evaluator '{path}': {e}")

    if not (isinstance(evaluator_class, type) and issubclass(evaluator_class, PointsEvaluator)):
        raise EvaluatorConfigurationError(f"'{path}' is not a PointsEvaluator")

    return evaluator_class()
