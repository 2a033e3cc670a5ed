"""
Settlement netting tests.

Pure engine tests; no database needed.
"""

from decimal import Decimal

from apps.payments.services.settlement import (
    PaymentRecord,
    Transfer,
    compute_settlement,
)
from apps.receipts.services.split_calculation import MemberSplit

D = Decimal


def _split(user_id, owed):
    return MemberSplit(user_id=user_id, user_name=user_id.upper(), items_total=D(owed))


def _paid(user_id, amount):
    return PaymentRecord(user_id=user_id, amount=D(amount))


class TestComputeSettlement:

    def test_two_debtors_one_creditor(self):
        splits = [_split('a', '30'), _split('b', '10'), _split('c', '10')]
        result = compute_settlement(splits, [_paid('c', '50')])

        assert [b.balance for b in result.balances] == [D('-30'), D('-10'), D('40')]
        assert result.transfers == [
            Transfer('a', 'A', 'c', 'C', D('30.00')),
            Transfer('b', 'B', 'c', 'C', D('10.00')),
        ]

    def test_balances_sum_to_zero(self):
        splits = [_split('a', '45.50'), _split('b', '20.25'), _split('c', '34.25')]
        payments = [_paid('a', '60'), _paid('b', '40')]

        result = compute_settlement(splits, payments)

        assert sum(b.balance for b in result.balances) == D('0')

    def test_transfers_settle_every_balance(self):
        splits = [_split(u, owed) for u, owed in [('a', '70'), ('b', '20'), ('c', '5'), ('d', '5')]]
        payments = [_paid('c', '60'), _paid('d', '40')]

        result = compute_settlement(splits, payments)

        net = {b.user_id: b.balance for b in result.balances}
        for t in result.transfers:
            net[t.from_user_id] += t.amount
            net[t.to_user_id] -= t.amount
        assert all(abs(v) < D('0.01') for v in net.values())

        debtors = sum(1 for b in result.balances if b.balance < D('-0.01'))
        creditors = sum(1 for b in result.balances if b.balance > D('0.01'))
        assert len(result.transfers) <= debtors + creditors - 1

    def test_no_payments_no_transfers(self):
        result = compute_settlement([_split('a', '10'), _split('b', '20')], [])

        assert result.transfers == []
        assert [b.balance for b in result.balances] == [D('-10'), D('-20')]

    def test_payments_are_summed(self):
        result = compute_settlement(
            [_split('a', '10'), _split('b', '10')],
            [_paid('a', '5'), _paid('a', '15')],
        )

        assert result.balances[0].paid == D('20')
        assert result.transfers == [Transfer('b', 'B', 'a', 'A', D('10.00'))]

    def test_unknown_payer_ignored(self):
        result = compute_settlement([_split('a', '10')], [_paid('ghost', '100')])

        assert [b.user_id for b in result.balances] == ['a']
        assert result.transfers == []

    def test_sub_cent_balances_ignored(self):
        result = compute_settlement(
            [_split('a', '10.005'), _split('b', '9.995')],
            [_paid('a', '10'), _paid('b', '10')],
        )

        assert result.transfers == []

    def test_transfer_amount_rounded_half_up(self):
        splits = [
            MemberSplit('a', 'A', items_total=D('3'), shared_cost_portion=D('0.325')),
            _split('b', '0'),
        ]
        result = compute_settlement(splits, [_paid('b', '3.325')])

        [transfer] = result.transfers
        assert transfer.amount == D('3.33')

    def test_reported_balances_are_not_mutated(self):
        splits = [_split('a', '30'), _split('b', '0')]
        result = compute_settlement(splits, [_paid('b', '30')])

        assert len(result.transfers) == 1
        assert result.balances[0].balance == D('-30')
        assert result.balances[1].balance == D('30')

    def test_largest_debtor_pays_largest_creditor_first(self):
        splits = [_split('a', '5'), _split('b', '50'), _split('c', '0'), _split('d', '0')]
        payments = [_paid('c', '15'), _paid('d', '40')]

        result = compute_settlement(splits, payments)

        assert result.transfers[0] == Transfer('b', 'B', 'd', 'D', D('40.00'))
