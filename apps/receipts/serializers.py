from decimal import Decimal, ROUND_HALF_UP
from rest_framework import serializers

from .models import Receipt


def money_field(**kwargs):
    """Read-only 2 dp amount, rounded half-up at output."""
    return serializers.DecimalField(
        max_digits=14,
        decimal_places=2,
        rounding=ROUND_HALF_UP,
        read_only=True,
        **kwargs
    )


class ReceiptSerializer(serializers.ModelSerializer):
    shared_fees = money_field()

    class Meta:
        model = Receipt
        fields = [
            'id',
            'order',
            'image_url',
            'subtotal',
            'tax',
            'service_fee',
            'delivery_fee',
            'shared_fees',
            'total_amount',
            'adjustments',
            'created_at',
            'updated_at',
        ]
        read_only_fields = [
            'id', 'order', 'image_url', 'subtotal', 'tax', 'service_fee',
            'delivery_fee', 'total_amount', 'adjustments', 'created_at', 'updated_at',
        ]


class SplitItemSerializer(serializers.Serializer):
    id = serializers.CharField(read_only=True)
    name = serializers.CharField(read_only=True)
    quantity = serializers.IntegerField(read_only=True)
    original_price = money_field()
    current_price = money_field()
    is_manual = serializers.BooleanField(read_only=True)


class MemberSplitSerializer(serializers.Serializer):
    """One member's share of the bill."""

    user_id = serializers.CharField(read_only=True)
    user_name = serializers.CharField(read_only=True)
    items = SplitItemSerializer(many=True, read_only=True)
    items_total = money_field()
    shared_cost_portion = money_field()
    total = money_field()


class ManualExtraItemInputSerializer(serializers.Serializer):
    user_id = serializers.UUIDField()
    user_name = serializers.CharField(max_length=150, required=False, allow_blank=True)
    name = serializers.CharField(max_length=200)
    price = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=Decimal('0.00'))


class ReceiptUpdateSerializer(serializers.Serializer):
    """
    Fee fields are required on every update.

    Leaving out ``individual_item_overrides`` or ``manual_extra_items``
    keeps what is stored; sending an empty value clears it.
    """

    tax = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=Decimal('0.00'))
    service_fee = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=Decimal('0.00'))
    delivery_fee = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=Decimal('0.00'))
    subtotal = serializers.DecimalField(
        max_digits=12,
        decimal_places=2,
        min_value=Decimal('0.00'),
        required=False,
        allow_null=True
    )
    individual_item_overrides = serializers.DictField(
        child=serializers.DecimalField(max_digits=12, decimal_places=2, min_value=Decimal('0.00')),
        required=False
    )
    manual_extra_items = ManualExtraItemInputSerializer(many=True, required=False)


class ReceiptWithSplitSerializer(serializers.Serializer):
    receipt = ReceiptSerializer(read_only=True)
    split = MemberSplitSerializer(many=True, read_only=True)
