"""
Service layer tests for payments app.

Tests cover:
- Replace-on-submit payment recording
- Settlement against the receipt split
"""

import pytest
from decimal import Decimal

from apps.orders.services.exceptions import OrderNotFoundError
from apps.payments.models import Payment
from apps.payments.services import (
    record_payments,
    list_payments,
    calculate_settlement,
)
from apps.payments.services.exceptions import InvalidPaymentError


@pytest.mark.django_db
class TestRecordPayments:

    def test_resubmission_replaces_payments(self, order, alice, bob):
        record_payments(order_id=order.id, user=alice, payments=[
            {'user_id': alice.id, 'amount': Decimal('50.00')},
            {'user_id': bob.id, 'amount': Decimal('20.00')},
        ])
        record_payments(order_id=order.id, user=alice, payments=[
            {'user_id': bob.id, 'amount': Decimal('70.00')},
        ])

        payments = list(list_payments(order_id=order.id, user=bob))
        assert len(payments) == 1
        assert payments[0].user == bob
        assert payments[0].amount == Decimal('70.00')

    def test_non_member_payer_rejected(self, order, alice, outsider):
        record_payments(order_id=order.id, user=alice, payments=[
            {'user_id': alice.id, 'amount': Decimal('10.00')},
        ])

        with pytest.raises(InvalidPaymentError):
            record_payments(order_id=order.id, user=alice, payments=[
                {'user_id': outsider.id, 'amount': Decimal('10.00')},
            ])
        assert Payment.objects.filter(order=order).count() == 1

    def test_outsider_cannot_record(self, order, outsider):
        with pytest.raises(OrderNotFoundError):
            record_payments(order_id=order.id, user=outsider, payments=[])

    def test_empty_submission_clears_payments(self, order, alice):
        record_payments(order_id=order.id, user=alice, payments=[
            {'user_id': alice.id, 'amount': Decimal('10.00')},
        ])
        record_payments(order_id=order.id, user=alice, payments=[])

        assert not Payment.objects.filter(order=order).exists()


@pytest.mark.django_db
class TestCalculateSettlement:

    def test_no_receipt_gives_empty_result(self, order_with_items, alice):
        result = calculate_settlement(order_id=order_with_items.id, user=alice)

        assert result.balances == []
        assert result.transfers == []

    def test_alice_paid_everything(self, receipt, alice, bob):
        record_payments(order_id=receipt.order_id, user=alice, payments=[
            {'user_id': alice.id, 'amount': Decimal('400.00')},
        ])

        result = calculate_settlement(order_id=receipt.order_id, user=bob)

        balances = {b.user_name: b.balance for b in result.balances}
        assert balances == {'Alice': Decimal('300.00'), 'Bob': Decimal('-300.00')}
        [transfer] = result.transfers
        assert (transfer.from_user_name, transfer.to_user_name) == ('Bob', 'Alice')
        assert transfer.amount == Decimal('300.00')

    def test_no_payments_everyone_owes(self, receipt, alice):
        result = calculate_settlement(order_id=receipt.order_id, user=alice)

        assert all(b.balance < 0 for b in result.balances)
        assert result.transfers == []

    def test_outsider_cannot_settle(self, receipt, outsider):
        with pytest.raises(OrderNotFoundError):
            calculate_settlement(order_id=receipt.order_id, user=outsider)
