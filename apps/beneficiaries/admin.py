from django.contrib import admin
from .models import Beneficiary


@admin.register(Beneficiary)
class BeneficiaryAdmin(admin.ModelAdmin):
    list_display = ['get_full_name', 'email', 'phone', 'available_points', 'registration_date']
    search_fields = ['first_name', 'last_name', 'email', 'document_id']
    # Balance changes only through purchases
    readonly_fields = ['available_points', 'registration_date']
    ordering = ['last_name', 'first_name']

    def get_full_name(self, obj):
        return obj.get_full_name()
    get_full_name.short_description = 'Name'
