from django.db import models


class RuleType(models.TextChoices):
    FIXED_AMOUNT = 'fixed_amount', 'Points per currency unit'
    PERCENTAGE = 'percentage', 'Percentage of amount'
    FIXED_PER_ITEM = 'fixed_per_item', 'Points per item'
    TIERED = 'tiered', 'Tiered'


class PointsRule(models.Model):
    """
    A point-earning rule.

    ``config`` holds the rule-type specific parameters:

    - fixed_amount: ``{"points_per_dollar": 2}``
    - percentage: ``{"percentage": 10}``
    - fixed_per_item: ``{"points_per_item": 5}``
    - tiered: ``{"tiers": [{"min_amount": 0, "points_per_dollar": 1},
      {"min_amount": 100, "points_per_dollar": 2}]}``

    Empty organization/branch/category means "any". Default rules apply
    whenever no time-gated rule is eligible.
    """

    name = models.CharField(max_length=200)
    description = models.TextField(blank=True)
    rule_type = models.CharField(max_length=20, choices=RuleType.choices)
    config = models.JSONField(default=dict)
    is_active = models.BooleanField(default=True)

    # Scope
    organization = models.ForeignKey(
        'organizations.Organization',
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name='points_rules'
    )
    branch = models.ForeignKey(
        'organizations.Branch',
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name='points_rules'
    )
    category = models.ForeignKey(
        'organizations.Category',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='points_rules'
    )

    # Selection
    is_default = models.BooleanField(default=False)
    priority = models.IntegerField(default=0)

    # Time gating (ignored for default rules)
    start_date = models.DateField(null=True, blank=True)
    end_date = models.DateField(null=True, blank=True)
    valid_from = models.DateTimeField(null=True, blank=True)
    valid_until = models.DateTimeField(null=True, blank=True)
    days_of_week = models.JSONField(null=True, blank=True)  # 0 = Sunday
    time_start = models.TimeField(null=True, blank=True)
    time_end = models.TimeField(null=True, blank=True)

    # Presentation in customer apps
    display_name = models.CharField(max_length=200, blank=True)
    display_icon = models.CharField(max_length=50, blank=True)
    display_color = models.CharField(max_length=20, blank=True)
    show_in_app = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'points_rules'
        indexes = [
            models.Index(fields=['is_active', 'organization'], name='points_rule_active_org_idx'),
            models.Index(fields=['priority'], name='points_rule_priority_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.name} ({self.get_rule_type_display()})"
