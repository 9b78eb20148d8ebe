from django.contrib import admin
from .models import Organization, Branch, Category


class BranchInline(admin.TabularInline):
    """Inline admin for branches within an organization."""
    model = Branch
    extra = 0
    fields = ['name', 'code', 'phone', 'active']


@admin.register(Organization)
class OrganizationAdmin(admin.ModelAdmin):
    list_display = ['name', 'business_name', 'tax_id', 'get_branch_count', 'creation_date']
    search_fields = ['name', 'business_name', 'tax_id']
    readonly_fields = ['creation_date']
    inlines = [BranchInline]

    def get_branch_count(self, obj):
        return obj.branches.count()
    get_branch_count.short_description = 'Branches'


@admin.register(Branch)
class BranchAdmin(admin.ModelAdmin):
    list_display = ['name', 'code', 'organization', 'active']
    list_filter = ['active', 'organization']
    search_fields = ['name', 'code', 'organization__name']

    def get_queryset(self, request):
        """Optimize query with select_related."""
        return super().get_queryset(request).select_related('organization')


@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    list_display = ['name']
    search_fields = ['name']
