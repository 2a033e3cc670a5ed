"""
Payment management service.

Records what members actually paid for an order and compares it with
the receipt split to produce settlement transfers.
"""

import logging
from typing import List
from uuid import UUID

from django.db import transaction
from django.db.models import QuerySet

from apps.accounts.models import User
from apps.groups.models import GroupMembership
from apps.orders.models import Order
from apps.orders.services import get_order
from apps.payments.models import Payment
from apps.receipts.models import Receipt
from apps.receipts.services import get_split

from .exceptions import InvalidPaymentError
from .settlement import PaymentRecord, SettlementResult, compute_settlement

logger = logging.getLogger(__name__)


@transaction.atomic
def record_payments(*, order_id: UUID, user: User, payments: List[dict]) -> List[Payment]:
    """
    Replace every payment recorded for an order.

    The delete and insert happen in one transaction so a concurrent
    settlement read sees either the old set or the new one.

    Raises:
        OrderNotFoundError: If order doesn't exist or isn't visible
        InvalidPaymentError: If a payer is not a member of the group
    """
    order = get_order(order_id=order_id, user=user)
    Order.objects.select_for_update().filter(id=order.id).first()

    member_ids = set(
        GroupMembership.objects.filter(group_id=order.group_id).values_list('user_id', flat=True)
    )
    for entry in payments:
        if entry['user_id'] not in member_ids:
            raise InvalidPaymentError(f"User {entry['user_id']} is not a member of this group")

    deleted, _ = Payment.objects.filter(order=order).delete()
    created = Payment.objects.bulk_create([
        Payment(order=order, user_id=entry['user_id'], amount=entry['amount'])
        for entry in payments
    ])

    logger.info(
        "User %s replaced payments for order %s: %d removed, %d recorded",
        user.id, order.id, deleted, len(created)
    )
    return created


def list_payments(*, order_id: UUID, user: User) -> QuerySet[Payment]:
    """
    Payments recorded for an order, oldest first.

    Raises:
        OrderNotFoundError: If order doesn't exist or isn't visible
    """
    order = get_order(order_id=order_id, user=user)
    return Payment.objects.filter(order=order).select_related('user').order_by('created_at')


def calculate_settlement(*, order_id: UUID, user: User) -> SettlementResult:
    """
    Balances and transfers for an order.

    An order without a receipt has nothing to settle yet and gets an
    empty result.

    Raises:
        OrderNotFoundError: If order doesn't exist or isn't visible
    """
    order = get_order(order_id=order_id, user=user)

    receipt = Receipt.objects.filter(order=order).select_related('order').first()
    if receipt is None:
        logger.debug("Order %s has no receipt, nothing to settle", order.id)
        return SettlementResult()

    split = get_split(receipt=receipt)
    records = [
        PaymentRecord(user_id=str(p.user_id), amount=p.amount)
        for p in Payment.objects.filter(order=order)
    ]
    result = compute_settlement(split.member_splits, records)

    logger.info(
        "Settlement for order %s: %d balance(s), %d transfer(s)",
        order.id, len(result.balances), len(result.transfers)
    )
    return result
