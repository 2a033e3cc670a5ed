from django.contrib import admin
from .models import Payment


@admin.register(Payment)
class PaymentAdmin(admin.ModelAdmin):
    list_display = ['order', 'user', 'amount', 'created_at']
    search_fields = ['user__email', 'order__group__name']
    raw_id_fields = ['order', 'user']
