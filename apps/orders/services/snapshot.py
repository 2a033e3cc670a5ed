"""
Read-only order snapshots handed to the split calculator.

The snapshot types are plain frozen dataclasses so the split and
settlement engines never touch the ORM.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional, Tuple

from apps.groups.models import GroupMembership
from apps.orders.models import Order


@dataclass(frozen=True)
class AddonCharge:
    name: str
    price: Decimal


@dataclass(frozen=True)
class OrderLineItem:
    id: str
    user_id: str
    user_name: str
    name: str
    quantity: int
    unit_price: Decimal
    addons: Tuple[AddonCharge, ...] = ()

    @property
    def original_price(self) -> Decimal:
        """Unit price times quantity plus every addon charged once."""
        addons_total = sum((a.price for a in self.addons), Decimal('0'))
        return self.unit_price * self.quantity + addons_total


@dataclass(frozen=True)
class GroupMember:
    user_id: str
    user_name: str


@dataclass(frozen=True)
class OrderSnapshot:
    """An order's line items plus the roster of the group that placed it."""

    items: Tuple[OrderLineItem, ...] = ()
    members: Tuple[GroupMember, ...] = ()
    order_id: Optional[str] = None


def build_order_snapshot(order: Order) -> OrderSnapshot:
    """
    Materialize an order into an OrderSnapshot.

    Items keep their creation order; members are listed in the order
    they joined the group.
    """
    items = (
        order.items
        .select_related('user', 'menu_item')
        .prefetch_related('addons')
        .order_by('created_at')
    )
    memberships = (
        GroupMembership.objects
        .filter(group_id=order.group_id)
        .select_related('user')
        .order_by('joined_at')
    )

    return OrderSnapshot(
        order_id=str(order.id),
        items=tuple(
            OrderLineItem(
                id=str(item.id),
                user_id=str(item.user_id),
                user_name=item.user.get_display_name(),
                name=item.display_name,
                quantity=item.quantity,
                unit_price=item.price_at_order,
                addons=tuple(
                    AddonCharge(name=addon.name, price=addon.price_at_order)
                    for addon in item.addons.all()
                ),
            )
            for item in items
        ),
        members=tuple(
            GroupMember(user_id=str(m.user_id), user_name=m.user.get_display_name())
            for m in memberships
        ),
    )
