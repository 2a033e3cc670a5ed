# ==========================================
# apps/orders/admin.py
# ==========================================

from django.contrib import admin
from .models import Order, OrderItem, OrderItemAddon


class OrderItemInline(admin.TabularInline):
    """Inline admin for the items of an order."""
    model = OrderItem
    extra = 0
    fields = ['user', 'menu_item', 'custom_item_name', 'quantity', 'price_at_order']
    readonly_fields = ['price_at_order']


class OrderItemAddonInline(admin.TabularInline):
    model = OrderItemAddon
    extra = 0
    fields = ['name', 'price_at_order']


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = ['id', 'group', 'restaurant', 'initiator', 'status', 'item_count', 'created_at']
    list_filter = ['status', 'created_at']
    search_fields = ['group__name', 'restaurant__name', 'initiator__email']
    inlines = [OrderItemInline]
    ordering = ['-created_at']

    @admin.display(description='Items')
    def item_count(self, obj):
        return obj.items.count()


@admin.register(OrderItem)
class OrderItemAdmin(admin.ModelAdmin):
    list_display = ['display_name', 'order', 'user', 'quantity', 'price_at_order']
    search_fields = ['custom_item_name', 'menu_item__name', 'user__email']
    inlines = [OrderItemAddonInline]
