"""
Receipt management service.

Keeps one receipt per order and turns it into split results. Splits are
never stored; every read recomputes them from the order items, the fee
fields and the adjustments overlay.
"""

import logging
from decimal import Decimal
from typing import Dict, List, Optional, Tuple
from uuid import UUID

from django.db import transaction

from apps.accounts.models import User
from apps.groups.models import GroupMembership
from apps.orders.models import Order
from apps.orders.services import get_order, build_order_snapshot
from apps.receipts.models import Receipt

from .exceptions import ReceiptNotFoundError, InvalidAdjustmentError
from .split_calculation import (
    ManualExtraItem,
    ReceiptOverlay,
    ReceiptRecord,
    SplitResult,
    compute_split,
)

logger = logging.getLogger(__name__)


def build_receipt_record(receipt: Receipt, overlay: Optional[ReceiptOverlay] = None) -> ReceiptRecord:
    """Engine input for a stored receipt, optionally with a replacement overlay."""
    return ReceiptRecord(
        tax=receipt.tax,
        service_fee=receipt.service_fee,
        delivery_fee=receipt.delivery_fee,
        subtotal=receipt.subtotal,
        overlay=overlay if overlay is not None else ReceiptOverlay.from_document(receipt.adjustments),
    )


def get_split(*, receipt: Receipt) -> SplitResult:
    """Recompute the split for a receipt."""
    return compute_split(build_order_snapshot(receipt.order), build_receipt_record(receipt))


def get_receipt_for_order(*, order_id: UUID, user: User) -> Receipt:
    """
    Get the receipt attached to an order.

    Raises:
        OrderNotFoundError: If order doesn't exist or isn't visible
        ReceiptNotFoundError: If the order has no receipt yet
    """
    order = get_order(order_id=order_id, user=user)
    try:
        return Receipt.objects.select_related('order').get(order=order)
    except Receipt.DoesNotExist:
        raise ReceiptNotFoundError(f"Order {order_id} has no receipt")


def get_receipt(*, receipt_id: UUID, user: User) -> Receipt:
    """
    Get a receipt the user can see.

    Raises:
        ReceiptNotFoundError: If receipt doesn't exist or isn't visible
    """
    try:
        return (
            Receipt.objects
            .select_related('order', 'order__group')
            .get(id=receipt_id, order__group__memberships__user=user)
        )
    except Receipt.DoesNotExist:
        raise ReceiptNotFoundError(f"Receipt with ID {receipt_id} not found")


@transaction.atomic
def create_manual_receipt(*, order_id: UUID, user: User) -> Tuple[Receipt, SplitResult]:
    """
    Create or refresh a receipt built from the order's own items.

    Fees are reset to zero. An existing adjustments overlay is kept, and
    the subtotal is the split's computed subtotal so the receipt total
    always matches the sum of member totals.

    Raises:
        OrderNotFoundError: If order doesn't exist or isn't visible
    """
    order = get_order(order_id=order_id, user=user)
    Order.objects.select_for_update().filter(id=order.id).first()

    receipt, created = Receipt.objects.get_or_create(order=order)
    receipt.image_url = ''
    receipt.tax = Decimal('0.00')
    receipt.service_fee = Decimal('0.00')
    receipt.delivery_fee = Decimal('0.00')

    split = compute_split(build_order_snapshot(order), build_receipt_record(receipt))
    receipt.subtotal = split.computed_subtotal
    receipt.total_amount = split.computed_subtotal
    receipt.save()

    logger.info(
        "Manual receipt %s for order %s by user %s (subtotal %s)",
        'created' if created else 'refreshed', order.id, user.id, receipt.subtotal
    )
    return receipt, split


def _validated_overrides(order: Order, overrides: Dict[str, Decimal]) -> Dict[str, Decimal]:
    item_ids = {str(pk) for pk in order.items.values_list('id', flat=True)}
    unknown = set(overrides) - item_ids
    if unknown:
        raise InvalidAdjustmentError(
            f"Overrides reference items not in this order: {', '.join(sorted(unknown))}"
        )
    return dict(overrides)


def _validated_extras(order: Order, extras: List[dict]) -> Tuple[ManualExtraItem, ...]:
    memberships = {
        str(m.user_id): m.user
        for m in GroupMembership.objects.filter(group_id=order.group_id).select_related('user')
    }
    result = []
    for extra in extras:
        user_id = str(extra['user_id'])
        member = memberships.get(user_id)
        if member is None:
            raise InvalidAdjustmentError(f"User {user_id} is not a member of this group")
        result.append(ManualExtraItem(
            user_id=user_id,
            user_name=extra.get('user_name') or member.get_display_name(),
            name=extra['name'],
            price=extra['price'],
        ))
    return tuple(result)


@transaction.atomic
def update_receipt(
    *,
    receipt_id: UUID,
    user: User,
    tax: Decimal,
    service_fee: Decimal,
    delivery_fee: Decimal,
    subtotal: Optional[Decimal] = None,
    individual_item_overrides: Optional[Dict[str, Decimal]] = None,
    manual_extra_items: Optional[List[dict]] = None,
) -> Tuple[Receipt, SplitResult]:
    """
    Replace fees and merge the adjustments overlay.

    Overrides and manual extra items that are not given keep their stored
    values. The subtotal is the given value, or the computed subtotal of
    the new split; the total is subtotal plus all fees.

    Raises:
        ReceiptNotFoundError: If receipt doesn't exist or isn't visible
        InvalidAdjustmentError: If an override or extra item doesn't fit the order
    """
    visible = get_receipt(receipt_id=receipt_id, user=user)
    receipt = Receipt.objects.select_for_update().select_related('order').get(id=visible.id)
    order = receipt.order

    stored = ReceiptOverlay.from_document(receipt.adjustments)
    overlay = ReceiptOverlay(
        item_price_overrides=(
            _validated_overrides(order, individual_item_overrides)
            if individual_item_overrides is not None
            else stored.item_price_overrides
        ),
        manual_extra_items=(
            _validated_extras(order, manual_extra_items)
            if manual_extra_items is not None
            else stored.manual_extra_items
        ),
    )

    receipt.tax = tax
    receipt.service_fee = service_fee
    receipt.delivery_fee = delivery_fee

    split = compute_split(build_order_snapshot(order), build_receipt_record(receipt, overlay))

    receipt.subtotal = subtotal if subtotal is not None else split.computed_subtotal
    receipt.total_amount = receipt.subtotal + tax + service_fee + delivery_fee
    receipt.adjustments = {**(receipt.adjustments or {}), **overlay.to_document()}
    receipt.save()

    logger.info(
        "Receipt %s updated by user %s: %d override(s), %d manual item(s), total %s",
        receipt.id, user.id,
        len(overlay.item_price_overrides), len(overlay.manual_extra_items),
        receipt.total_amount
    )
    return receipt, split
