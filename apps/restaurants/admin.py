# ==========================================
# apps/restaurants/admin.py
# ==========================================

from django.contrib import admin
from .models import Restaurant, MenuCategory, MenuItem, MenuItemVariant, MenuItemAddon


class MenuCategoryInline(admin.TabularInline):
    model = MenuCategory
    extra = 0
    fields = ['name', 'position']


class MenuItemVariantInline(admin.TabularInline):
    model = MenuItemVariant
    extra = 0
    fields = ['name', 'price_diff']


class MenuItemAddonInline(admin.TabularInline):
    model = MenuItemAddon
    extra = 0
    fields = ['name', 'price']


@admin.register(Restaurant)
class RestaurantAdmin(admin.ModelAdmin):
    list_display = ['name', 'is_active', 'created_at']
    list_filter = ['is_active']
    search_fields = ['name']
    inlines = [MenuCategoryInline]


@admin.register(MenuItem)
class MenuItemAdmin(admin.ModelAdmin):
    """Admin interface for menu items with their variants and addons."""

    list_display = ['name', 'category', 'base_price', 'is_available']
    list_filter = ['is_available', 'category__restaurant']
    search_fields = ['name', 'category__restaurant__name']
    inlines = [MenuItemVariantInline, MenuItemAddonInline]
