import pytest
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from django.utils import timezone
from apps.points.evaluators import (
    PointsDimensions,
    RuleBasedPointsEvaluator,
    apply_rule,
    is_rule_eligible,
    get_points_evaluator,
)
from apps.points.exceptions import PointsEvaluationError, EvaluatorConfigurationError
from apps.points.models import PointsRule, RuleType


def at(hour, minute=0, day=18):
    """October 2026 moment in UTC; the 18th is a Sunday."""
    return timezone.make_aware(datetime(2026, 10, day, hour, minute))


class TestApplyRule:
    """Tests for the per-type point formulas."""

    def test_fixed_amount(self):
        rule = PointsRule(rule_type=RuleType.FIXED_AMOUNT, config={'points_per_dollar': 2})
        assert apply_rule(rule, Decimal('12.75')) == 25

    def test_percentage(self):
        rule = PointsRule(rule_type=RuleType.PERCENTAGE, config={'percentage': 10})
        assert apply_rule(rule, Decimal('99.00')) == 9

    def test_fixed_per_item(self):
        rule = PointsRule(rule_type=RuleType.FIXED_PER_ITEM, config={'points_per_item': 5})
        assert apply_rule(rule, Decimal('1.00'), item_count=3) == 15

    def test_tiered_points_per_dollar(self):
        rule = PointsRule(rule_type=RuleType.TIERED, config={'tiers': [
            {'min_amount': 0, 'points_per_dollar': 1},
            {'min_amount': 50, 'points_per_dollar': 2},
            {'min_amount': 100, 'points_per_dollar': 3},
        ]})
        assert apply_rule(rule, Decimal('49.99')) == 49
        assert apply_rule(rule, Decimal('50.00')) == 100
        assert apply_rule(rule, Decimal('150.00')) == 450

    def test_tiered_flat_points(self):
        rule = PointsRule(rule_type=RuleType.TIERED, config={'tiers': [
            {'min_amount': 100, 'points': 50},
            {'min_amount': 20, 'points': 10},
        ]})
        assert apply_rule(rule, Decimal('25.00')) == 10
        assert apply_rule(rule, Decimal('120.00')) == 50

    def test_tiered_below_every_tier(self):
        rule = PointsRule(rule_type=RuleType.TIERED, config={'tiers': [
            {'min_amount': 20, 'points': 10},
        ]})
        assert apply_rule(rule, Decimal('5.00')) == 0

    @pytest.mark.parametrize('rule_type,config', [
        (RuleType.FIXED_AMOUNT, {}),
        (RuleType.PERCENTAGE, {'percentage': 'lots'}),
        (RuleType.TIERED, {'tiers': []}),
        (RuleType.TIERED, {'tiers': ['not-a-tier']}),
        ('mystery', {}),
    ])
    def test_malformed_rule(self, rule_type, config):
        rule = PointsRule(rule_type=rule_type, config=config)
        with pytest.raises(PointsEvaluationError):
            apply_rule(rule, Decimal('10.00'))


class TestRuleEligibility:
    """Tests for is_rule_eligible()"""

    def test_default_rule_ignores_gates(self):
        rule = PointsRule(is_default=True, days_of_week=[1], time_start=time(8), time_end=time(9))
        assert is_rule_eligible(rule, at(12))

    def test_days_of_week_zero_is_sunday(self):
        rule = PointsRule(days_of_week=[0, 6])
        assert is_rule_eligible(rule, at(12, day=18))
        assert is_rule_eligible(rule, at(12, day=17))
        assert not is_rule_eligible(rule, at(12, day=19))

    def test_time_window(self):
        rule = PointsRule(time_start=time(9, 0), time_end=time(17, 0))
        assert is_rule_eligible(rule, at(9))
        assert is_rule_eligible(rule, at(17))
        assert not is_rule_eligible(rule, at(8, 59))
        assert not is_rule_eligible(rule, at(17, 1))

    def test_overnight_time_window(self):
        rule = PointsRule(time_start=time(22, 0), time_end=time(2, 0))
        assert is_rule_eligible(rule, at(23))
        assert is_rule_eligible(rule, at(1, 30))
        assert not is_rule_eligible(rule, at(12))

    def test_date_window(self):
        rule = PointsRule(start_date=date(2026, 10, 1), end_date=date(2026, 10, 18))
        assert is_rule_eligible(rule, at(23, 59))
        assert not is_rule_eligible(rule, at(0, 0, day=19))

    def test_validity_window(self):
        moment = at(12)
        rule = PointsRule(valid_from=moment - timedelta(hours=1), valid_until=moment + timedelta(hours=1))
        assert is_rule_eligible(rule, moment)
        assert not is_rule_eligible(rule, moment + timedelta(hours=2))
        assert not is_rule_eligible(rule, moment - timedelta(hours=2))


@pytest.mark.django_db
class TestRuleBasedPointsEvaluator:
    """Tests for rule selection and evaluation."""

    def test_no_rules_gives_none(self, sunday_noon):
        evaluator = RuleBasedPointsEvaluator()
        assert evaluator.evaluate(Decimal('10.00'), PointsDimensions(), sunday_noon) is None

    def test_default_rule(self, default_rule, organization, branch, sunday_noon):
        evaluator = RuleBasedPointsEvaluator()
        dimensions = PointsDimensions(organization_id=organization.id, branch_id=branch.id)

        assert evaluator.evaluate(Decimal('25.00'), dimensions, sunday_noon) == 25

    def test_inactive_rules_are_ignored(self, rule_factory, sunday_noon):
        rule_factory(is_default=True, is_active=False)

        evaluator = RuleBasedPointsEvaluator()
        assert evaluator.evaluate(Decimal('25.00'), PointsDimensions(), sunday_noon) is None

    def test_other_organization_rule_is_ignored(self, rule_factory, organization, other_organization, sunday_noon):
        rule_factory(organization=other_organization, config={'points_per_dollar': 10})

        evaluator = RuleBasedPointsEvaluator()
        dimensions = PointsDimensions(organization_id=organization.id)
        assert evaluator.evaluate(Decimal('10.00'), dimensions, sunday_noon) is None

    def test_scoped_rule_needs_matching_dimension(self, rule_factory, organization, sunday_noon):
        """A rule scoped to an organization does not apply when none is known."""
        rule_factory(organization=organization)

        evaluator = RuleBasedPointsEvaluator()
        assert evaluator.evaluate(Decimal('10.00'), PointsDimensions(), sunday_noon) is None

    def test_time_gated_rule_beats_default(self, default_rule, rule_factory, sunday_noon):
        rule_factory(name='Sunday double', days_of_week=[0], config={'points_per_dollar': 2})

        evaluator = RuleBasedPointsEvaluator()
        assert evaluator.evaluate(Decimal('10.00'), PointsDimensions(), sunday_noon) == 20

    def test_gated_rule_outside_its_window_falls_back(self, default_rule, rule_factory, sunday_noon):
        rule_factory(name='Monday double', days_of_week=[1], config={'points_per_dollar': 2})

        evaluator = RuleBasedPointsEvaluator()
        assert evaluator.evaluate(Decimal('10.00'), PointsDimensions(), sunday_noon) == 10

    def test_higher_priority_wins(self, rule_factory, sunday_noon):
        rule_factory(name='Low', priority=1, config={'points_per_dollar': 2})
        rule_factory(name='High', priority=5, config={'points_per_dollar': 3})

        evaluator = RuleBasedPointsEvaluator()
        assert evaluator.evaluate(Decimal('10.00'), PointsDimensions(), sunday_noon) == 30

    def test_more_specific_scope_wins(self, rule_factory, organization, branch, sunday_noon):
        rule_factory(name='Everywhere', config={'points_per_dollar': 2})
        rule_factory(name='This branch', organization=organization, branch=branch,
                     config={'points_per_dollar': 4})

        evaluator = RuleBasedPointsEvaluator()
        dimensions = PointsDimensions(organization_id=organization.id, branch_id=branch.id)
        assert evaluator.evaluate(Decimal('10.00'), dimensions, sunday_noon) == 40

    def test_newest_rule_breaks_ties(self, rule_factory, sunday_noon):
        older = rule_factory(name='Older', config={'points_per_dollar': 2})
        newer = rule_factory(name='Newer', config={'points_per_dollar': 5})
        PointsRule.objects.filter(id=older.id).update(created_at=sunday_noon - timedelta(days=2))
        PointsRule.objects.filter(id=newer.id).update(created_at=sunday_noon - timedelta(days=1))

        evaluator = RuleBasedPointsEvaluator()
        assert evaluator.evaluate(Decimal('10.00'), PointsDimensions(), sunday_noon) == 50

    def test_category_rule(self, rule_factory, category, sunday_noon):
        rule_factory(category=category, rule_type=RuleType.PERCENTAGE, config={'percentage': 50})

        evaluator = RuleBasedPointsEvaluator()
        assert evaluator.evaluate(
            Decimal('10.00'), PointsDimensions(category_id=category.id), sunday_noon
        ) == 5

    def test_per_item_rule_uses_item_count(self, rule_factory, sunday_noon):
        rule_factory(rule_type=RuleType.FIXED_PER_ITEM, config={'points_per_item': 3}, is_default=True)

        evaluator = RuleBasedPointsEvaluator()
        assert evaluator.evaluate(
            Decimal('10.00'), PointsDimensions(item_count=4), sunday_noon
        ) == 12

    def test_negative_amount(self, default_rule, sunday_noon):
        evaluator = RuleBasedPointsEvaluator()
        with pytest.raises(PointsEvaluationError):
            evaluator.evaluate(Decimal('-1.00'), PointsDimensions(), sunday_noon)


class TestGetPointsEvaluator:
    """Tests for get_points_evaluator()"""

    def test_default_class(self):
        assert isinstance(get_points_evaluator(), RuleBasedPointsEvaluator)

    def test_unknown_class(self, settings):
        settings.POINTS_EVALUATOR_CLASS = 'apps.points.evaluators.Missing'
        with pytest.raises(EvaluatorConfigurationError):
            get_points_evaluator()

    def test_not_an_evaluator(self, settings):
        settings.POINTS_EVALUATOR_CLASS = 'apps.points.models.PointsRule'
        with pytest.raises(EvaluatorConfigurationError):
            get_points_evaluator()
