from django.contrib import admin
from .models import Receipt


@admin.register(Receipt)
class ReceiptAdmin(admin.ModelAdmin):
    list_display = ['order', 'subtotal', 'tax', 'service_fee', 'delivery_fee', 'total_amount', 'updated_at']
    search_fields = ['order__group__name', 'order__restaurant__name']
    readonly_fields = ['created_at', 'updated_at']
    raw_id_fields = ['order']
