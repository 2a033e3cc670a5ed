"""
Bill split calculation.

Pure functions over the order snapshot and receipt record; nothing here
touches the database. Amounts stay unrounded Decimals until they are
serialized.

Shared costs are distributed as follows:
- tax and service fee in proportion to each member's items total
  (equally when the subtotal is zero)
- delivery fee equally between everyone in the split
"""

import logging
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Dict, List, Mapping, Optional, Tuple

from apps.orders.services.snapshot import OrderSnapshot

logger = logging.getLogger(__name__)

ZERO = Decimal('0')

OVERRIDES_KEY = 'individualItemOverrides'
MANUAL_ITEMS_KEY = 'manualExtraItems'


def _to_decimal(value) -> Decimal:
    if isinstance(value, Decimal):
        return value
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise ValueError(f"Invalid amount: {value!r}")


@dataclass(frozen=True)
class ManualExtraItem:
    """A charge billed to one member that was not ordered through the app."""

    user_id: str
    user_name: str
    name: str
    price: Decimal

    def to_document(self) -> dict:
        return {
            'userId': self.user_id,
            'userName': self.user_name,
            'name': self.name,
            'price': str(self.price),
        }


@dataclass(frozen=True)
class ReceiptOverlay:
    """
    Corrections layered over the ordered items.

    ``item_price_overrides`` maps a line item id to its corrected line
    total. A missing key means the ordered price stands.
    """

    item_price_overrides: Mapping[str, Decimal] = field(default_factory=dict)
    manual_extra_items: Tuple[ManualExtraItem, ...] = ()

    @classmethod
    def from_document(cls, document: Optional[dict]) -> 'ReceiptOverlay':
        """Parse the JSON document stored on the receipt."""
        document = document or {}
        overrides = {
            str(item_id): _to_decimal(price)
            for item_id, price in (document.get(OVERRIDES_KEY) or {}).items()
        }
        extras = tuple(
            ManualExtraItem(
                user_id=str(entry['userId']),
                user_name=entry.get('userName') or '',
                name=entry.get('name') or 'Extra',
                price=_to_decimal(entry['price']),
            )
            for entry in (document.get(MANUAL_ITEMS_KEY) or [])
        )
        return cls(item_price_overrides=overrides, manual_extra_items=extras)

    def to_document(self) -> dict:
        return {
            OVERRIDES_KEY: {k: str(v) for k, v in self.item_price_overrides.items()},
            MANUAL_ITEMS_KEY: [item.to_document() for item in self.manual_extra_items],
        }


@dataclass(frozen=True)
class ReceiptRecord:
    tax: Decimal = ZERO
    service_fee: Decimal = ZERO
    delivery_fee: Decimal = ZERO
    subtotal: Optional[Decimal] = None
    overlay: ReceiptOverlay = field(default_factory=ReceiptOverlay)


@dataclass
class SplitItem:
    id: str
    name: str
    quantity: int
    original_price: Decimal
    current_price: Decimal
    is_manual: bool = False


@dataclass
class MemberSplit:
    user_id: str
    user_name: str
    items: List[SplitItem] = field(default_factory=list)
    items_total: Decimal = ZERO
    shared_cost_portion: Decimal = ZERO

    @property
    def total(self) -> Decimal:
        return self.items_total + self.shared_cost_portion


@dataclass
class SplitResult:
    member_splits: List[MemberSplit] = field(default_factory=list)
    computed_subtotal: Decimal = ZERO

    @property
    def total(self) -> Decimal:
        return sum((s.total for s in self.member_splits), ZERO)


def compute_split(order: OrderSnapshot, receipt: ReceiptRecord) -> SplitResult:
    """
    Split an order's receipt between its members.

    Members appear in the order their first item (or manual extra) is
    seen. An order with neither items nor extras falls back to the group
    roster so pure fees are still shared out.
    """
    overrides = receipt.overlay.item_price_overrides
    splits: Dict[str, MemberSplit] = {}

    for item in order.items:
        original = item.original_price
        current = overrides.get(item.id, original)

        member = splits.get(item.user_id)
        if member is None:
            member = splits[item.user_id] = MemberSplit(item.user_id, item.user_name)

        member.items.append(SplitItem(
            id=item.id,
            name=item.name,
            quantity=item.quantity,
            original_price=original,
            current_price=current,
        ))
        member.items_total += current

    for index, extra in enumerate(receipt.overlay.manual_extra_items):
        member = splits.get(extra.user_id)
        if member is None:
            member = splits[extra.user_id] = MemberSplit(extra.user_id, extra.user_name)

        member.items.append(SplitItem(
            id=f'manual-{index}',
            name=extra.name,
            quantity=1,
            original_price=extra.price,
            current_price=extra.price,
            is_manual=True,
        ))
        member.items_total += extra.price

    if not splits:
        for m in order.members:
            splits[m.user_id] = MemberSplit(m.user_id, m.user_name)

    member_splits = list(splits.values())
    computed_subtotal = sum((s.items_total for s in member_splits), ZERO)

    if member_splits:
        proportional_pool = receipt.tax + receipt.service_fee
        count = len(member_splits)
        delivery_share = receipt.delivery_fee / count

        for split in member_splits:
            if computed_subtotal != 0:
                share = proportional_pool * split.items_total / computed_subtotal
            else:
                share = proportional_pool / count
            split.shared_cost_portion = share + delivery_share

    logger.debug(
        "Split order %s between %d member(s), subtotal %s",
        order.order_id, len(member_splits), computed_subtotal
    )
    return SplitResult(member_splits=member_splits, computed_subtotal=computed_subtotal)
