from decimal import Decimal
from rest_framework import serializers

from apps.accounts.serializers import UserMinimalSerializer
from apps.receipts.serializers import money_field
from .models import Payment


class PaymentSerializer(serializers.ModelSerializer):
    user = UserMinimalSerializer(read_only=True)

    class Meta:
        model = Payment
        fields = ['id', 'order', 'user', 'amount', 'created_at']
        read_only_fields = fields


class PaymentInputSerializer(serializers.Serializer):
    user_id = serializers.UUIDField()
    amount = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=Decimal('0.00'))


class RecordPaymentsSerializer(serializers.Serializer):
    """The full payment set for an order; it replaces whatever was recorded."""

    payments = PaymentInputSerializer(many=True)


class BalanceSerializer(serializers.Serializer):
    user_id = serializers.CharField(read_only=True)
    user_name = serializers.CharField(read_only=True)
    owed = money_field()
    paid = money_field()
    balance = money_field()


class TransferSerializer(serializers.Serializer):
    from_user_id = serializers.CharField(read_only=True)
    from_user_name = serializers.CharField(read_only=True)
    to_user_id = serializers.CharField(read_only=True)
    to_user_name = serializers.CharField(read_only=True)
    amount = money_field()


class SettlementSerializer(serializers.Serializer):
    balances = BalanceSerializer(many=True, read_only=True)
    transfers = TransferSerializer(many=True, read_only=True)
