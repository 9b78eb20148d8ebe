from django.contrib import admin
from .models import Purchase, PurchaseItem


class PurchaseItemInline(admin.TabularInline):
    """Inline admin for line items within a purchase."""
    model = PurchaseItem
    extra = 0
    fields = ['item_name', 'quantity', 'unit_price', 'subtotal', 'points_earned']
    readonly_fields = fields

    def has_add_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(Purchase)
class PurchaseAdmin(admin.ModelAdmin):
    """
    Read-only admin for purchases.

    Purchases are recorded by the purchase workflow only; the admin never
    adds, edits or deletes them.
    """

    list_display = [
        'purchase_number',
        'beneficiary',
        'branch',
        'cashier',
        'total_amount',
        'points_earned',
        'purchase_date',
    ]

    list_filter = [
        'branch__organization',
        'branch',
        'purchase_date',
    ]

    search_fields = [
        'purchase_number',
        'beneficiary__first_name',
        'beneficiary__last_name',
        'beneficiary__email',
        'cashier__email',
    ]

    date_hierarchy = 'purchase_date'
    ordering = ['-purchase_date']
    inlines = [PurchaseItemInline]

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False

    def get_queryset(self, request):
        """Optimize query with select_related."""
        qs = super().get_queryset(request)
        return qs.select_related('beneficiary', 'branch', 'cashier')
