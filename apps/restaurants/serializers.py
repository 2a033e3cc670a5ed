from rest_framework import serializers
from .models import Restaurant, MenuCategory, MenuItem, MenuItemVariant, MenuItemAddon


class MenuItemVariantSerializer(serializers.ModelSerializer):

    class Meta:
        model = MenuItemVariant
        fields = ['id', 'name', 'price_diff']
        read_only_fields = fields


class MenuItemAddonSerializer(serializers.ModelSerializer):

    class Meta:
        model = MenuItemAddon
        fields = ['id', 'name', 'price']
        read_only_fields = fields


class MenuItemSerializer(serializers.ModelSerializer):
    """Menu item with its variants and addons."""

    variants = MenuItemVariantSerializer(many=True, read_only=True)
    addons = MenuItemAddonSerializer(many=True, read_only=True)

    class Meta:
        model = MenuItem
        fields = [
            'id',
            'name',
            'description',
            'base_price',
            'is_available',
            'variants',
            'addons',
        ]
        read_only_fields = fields


class MenuCategorySerializer(serializers.ModelSerializer):

    items = MenuItemSerializer(many=True, read_only=True)

    class Meta:
        model = MenuCategory
        fields = ['id', 'name', 'position', 'items']
        read_only_fields = fields


class RestaurantSerializer(serializers.ModelSerializer):
    """Restaurant with its full menu."""

    categories = MenuCategorySerializer(many=True, read_only=True)

    class Meta:
        model = Restaurant
        fields = ['id', 'name', 'description', 'categories']
        read_only_fields = fields


class RestaurantListSerializer(serializers.ModelSerializer):
    """Lightweight serializer for list views."""

    class Meta:
        model = Restaurant
        fields = ['id', 'name', 'description']
        read_only_fields = fields
