from django.contrib import admin
from django.utils.html import format_html
from .models import PointsRule


@admin.register(PointsRule)
class PointsRuleAdmin(admin.ModelAdmin):
    """
    Admin interface for points rules.

    Rules are the configuration of the default evaluator; purchases keep
    the points they were awarded when rules change later.
    """

    list_display = [
        'name',
        'rule_type',
        'organization',
        'branch',
        'priority',
        'default_badge',
        'is_active',
        'created_at',
    ]

    list_filter = [
        'is_active',
        'is_default',
        'rule_type',
        'organization',
    ]

    search_fields = ['name', 'display_name', 'description']
    readonly_fields = ['created_at', 'updated_at']
    ordering = ['-priority', '-created_at']

    fieldsets = (
        ('Rule', {
            'fields': ('name', 'description', 'rule_type', 'config', 'is_active'),
        }),
        ('Scope', {
            'fields': ('organization', 'branch', 'category', 'is_default', 'priority'),
        }),
        ('Schedule', {
            'fields': (
                'start_date',
                'end_date',
                'valid_from',
                'valid_until',
                'days_of_week',
                'time_start',
                'time_end',
            ),
            'description': 'Ignored for default rules.',
        }),
        ('Display', {
            'fields': ('display_name', 'display_icon', 'display_color', 'show_in_app'),
            'classes': ('collapse',),
        }),
        ('Metadata', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',),
        }),
    )

    def default_badge(self, obj):
        """Display default rules as a badge."""
        if not obj.is_default:
            return ''
        return format_html(
            '<span style="background: #6B8E5E; color: white; padding: 3px 8px; '
            'border-radius: 10px; font-size: 11px;">Default</span>'
        )
    default_badge.short_description = 'Default'

    def get_queryset(self, request):
        """Optimize query with select_related."""
        qs = super().get_queryset(request)
        return qs.select_related('organization', 'branch', 'category')
