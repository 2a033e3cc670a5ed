from decimal import Decimal
from rest_framework import serializers

from apps.accounts.serializers import UserMinimalSerializer
from apps.groups.models import Group
from apps.restaurants.models import Restaurant
from .models import Order, OrderItem, OrderItemAddon


class OrderItemAddonSerializer(serializers.ModelSerializer):
    class Meta:
        model = OrderItemAddon
        fields = ['id', 'addon', 'name', 'price_at_order']


class OrderItemSerializer(serializers.ModelSerializer):
    """Ordered item with its snapshotted price and addons."""

    user = UserMinimalSerializer(read_only=True)
    name = serializers.CharField(source='display_name', read_only=True)
    addons = OrderItemAddonSerializer(many=True, read_only=True)
    line_total = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True)

    class Meta:
        model = OrderItem
        fields = [
            'id',
            'user',
            'menu_item',
            'variant',
            'custom_item_name',
            'name',
            'quantity',
            'price_at_order',
            'addons',
            'line_total',
            'created_at',
        ]


class OrderSerializer(serializers.ModelSerializer):
    """Full order with items."""

    initiator = UserMinimalSerializer(read_only=True)
    restaurant_name = serializers.CharField(source='restaurant.name', read_only=True)
    group_name = serializers.CharField(source='group.name', read_only=True)
    items = OrderItemSerializer(many=True, read_only=True)

    class Meta:
        model = Order
        fields = [
            'id',
            'group',
            'group_name',
            'restaurant',
            'restaurant_name',
            'initiator',
            'status',
            'items',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class OrderCreateSerializer(serializers.Serializer):
    group = serializers.PrimaryKeyRelatedField(queryset=Group.objects.all())
    restaurant = serializers.PrimaryKeyRelatedField(
        queryset=Restaurant.objects.filter(is_active=True)
    )

    def validate_group(self, value):
        request = self.context.get('request')
        if request and not value.has_member(request.user):
            raise serializers.ValidationError("You are not a member of this group")
        return value


class CustomAddonInputSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=200)
    price = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=Decimal('0.00'))


class OrderItemInputSerializer(serializers.Serializer):
    """
    One line to add: a catalog item or a free-text custom item.

    Catalog lines take addon ids; custom lines take ``{name, price}`` addons.
    """

    menu_item = serializers.UUIDField(required=False)
    variant = serializers.UUIDField(required=False, allow_null=True)
    custom_item_name = serializers.CharField(max_length=200, required=False)
    unit_price = serializers.DecimalField(
        max_digits=10,
        decimal_places=2,
        min_value=Decimal('0.00'),
        required=False
    )
    quantity = serializers.IntegerField(min_value=1)
    addons = serializers.ListField(child=serializers.JSONField(), required=False, default=list)

    def validate(self, attrs):
        has_catalog = bool(attrs.get('menu_item'))
        has_custom = bool(attrs.get('custom_item_name'))

        if has_catalog == has_custom:
            raise serializers.ValidationError(
                "Provide either menu_item or custom_item_name"
            )

        if has_catalog:
            addon_ids = serializers.ListField(child=serializers.UUIDField())
            attrs['addons'] = addon_ids.run_validation(attrs.get('addons', []))
        else:
            if attrs.get('unit_price') is None:
                raise serializers.ValidationError(
                    {'unit_price': "Custom items need a unit price"}
                )
            addons = CustomAddonInputSerializer(data=attrs.get('addons', []), many=True)
            addons.is_valid(raise_exception=True)
            attrs['addons'] = addons.validated_data
        return attrs


class AddItemsSerializer(serializers.Serializer):
    items = OrderItemInputSerializer(many=True, allow_empty=False)
