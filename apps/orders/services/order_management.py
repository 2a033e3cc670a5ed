"""
Order management service.

Handles the lifecycle of a group order: opening it, adding and removing
items, and closing or cancelling it.
"""

import logging
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from django.core.exceptions import ValidationError
from django.db import transaction
from django.db.models import QuerySet

from apps.accounts.models import User
from apps.groups.models import Group
from apps.restaurants.models import Restaurant, MenuItem
from apps.orders.models import Order, OrderItem, OrderItemAddon, OrderStatus

from .exceptions import (
    OrderNotFoundError,
    ActiveOrderExistsError,
    OrderNotOpenError,
    CatalogItemNotFoundError,
    OrderItemNotFoundError,
    NotInitiatorError,
    CannotRemoveItemError,
)

logger = logging.getLogger(__name__)


def _visible_orders(user: User) -> QuerySet[Order]:
    return Order.objects.filter(group__memberships__user=user).distinct()


def get_order(*, order_id: UUID, user: User) -> Order:
    """
    Get an order the user can see.

    Orders of groups the user does not belong to are reported as missing.

    Raises:
        OrderNotFoundError: If order doesn't exist or isn't visible
    """
    try:
        return (
            _visible_orders(user)
            .select_related('group', 'restaurant', 'initiator')
            .get(id=order_id)
        )
    except Order.DoesNotExist:
        raise OrderNotFoundError(f"Order with ID {order_id} not found")


def list_user_orders(*, user: User, status: Optional[str] = None) -> QuerySet[Order]:
    """Orders from every group the user belongs to, newest first."""
    queryset = (
        _visible_orders(user)
        .select_related('group', 'restaurant', 'initiator')
        .prefetch_related('items__addons', 'items__user', 'items__menu_item')
    )
    if status:
        queryset = queryset.filter(status=status)
    return queryset.order_by('-created_at')


@transaction.atomic
def create_order(*, group: Group, restaurant: Restaurant, initiator: User) -> Order:
    """
    Open a new order for a group.

    The group row is locked so two members cannot open orders at once.

    Raises:
        ActiveOrderExistsError: If the group already has an open order
    """
    Group.objects.select_for_update().filter(id=group.id).first()

    if Order.objects.filter(group=group, status=OrderStatus.OPEN).exists():
        raise ActiveOrderExistsError(f"{group.name} already has an open order")

    order = Order.objects.create(
        group=group,
        restaurant=restaurant,
        initiator=initiator,
        status=OrderStatus.OPEN,
    )

    logger.info(
        "Order %s opened by user %s for group %s at %s",
        order.id, initiator.id, group.id, restaurant.id
    )
    return order


def _lock_open_order(order_id: UUID) -> Order:
    try:
        order = Order.objects.select_for_update().get(id=order_id)
    except Order.DoesNotExist:
        raise OrderNotFoundError(f"Order with ID {order_id} not found")

    if not order.is_open:
        raise OrderNotOpenError(f"Order is {order.status}, items can no longer change")
    return order


def _resolve_catalog_line(order: Order, line: dict):
    """Return (menu_item, variant, unit_price, addon rows) for a catalog line."""
    try:
        menu_item = MenuItem.objects.get(
            id=line['menu_item'],
            category__restaurant_id=order.restaurant_id,
        )
    except MenuItem.DoesNotExist:
        raise CatalogItemNotFoundError(f"Menu item {line['menu_item']} is not on this menu")

    unit_price = menu_item.base_price
    variant = None
    if line.get('variant'):
        variant = menu_item.variants.filter(id=line['variant']).first()
        if variant is None:
            raise CatalogItemNotFoundError(
                f"Variant {line['variant']} does not belong to {menu_item.name}"
            )
        unit_price += variant.price_diff

    addons = []
    for addon_id in line.get('addons', []):
        addon = menu_item.addons.filter(id=addon_id).first()
        if addon is None:
            raise CatalogItemNotFoundError(
                f"Addon {addon_id} does not belong to {menu_item.name}"
            )
        addons.append({'addon': addon, 'name': addon.name, 'price': addon.price})

    return menu_item, variant, unit_price, addons


@transaction.atomic
def add_items(*, order_id: UUID, user: User, items: List[dict]) -> List[OrderItem]:
    """
    Add items to an open order on behalf of ``user``.

    Each entry is either a catalog line ``{menu_item, variant?, quantity,
    addons?: [addon ids]}`` or a custom line ``{custom_item_name,
    unit_price, quantity, addons?: [{name, price}]}``. Catalog prices are
    copied onto the order item (base price plus variant difference) so
    later menu edits do not change the order.

    Raises:
        OrderNotFoundError: If order doesn't exist
        OrderNotOpenError: If the order is closed or cancelled
        CatalogItemNotFoundError: If a menu item, variant or addon is unknown
    """
    order = _lock_open_order(order_id)

    created = []
    for line in items:
        if line.get('menu_item'):
            menu_item, variant, unit_price, addons = _resolve_catalog_line(order, line)
            custom_name = ''
        else:
            menu_item, variant = None, None
            unit_price = Decimal(line['unit_price'])
            custom_name = line['custom_item_name']
            addons = [
                {'addon': None, 'name': a['name'], 'price': Decimal(a['price'])}
                for a in line.get('addons', [])
            ]

        order_item = OrderItem.objects.create(
            order=order,
            user=user,
            menu_item=menu_item,
            variant=variant,
            custom_item_name=custom_name,
            quantity=line['quantity'],
            price_at_order=unit_price,
        )
        OrderItemAddon.objects.bulk_create([
            OrderItemAddon(
                order_item=order_item,
                addon=a['addon'],
                name=a['name'],
                price_at_order=a['price'],
            )
            for a in addons
        ])
        created.append(order_item)

    logger.info("User %s added %d item(s) to order %s", user.id, len(created), order.id)
    return created


@transaction.atomic
def remove_item(*, order_id: UUID, item_id: UUID, user: User) -> None:
    """
    Remove an item from an open order.

    Only the member who added the item or the order initiator may remove it.

    Raises:
        OrderNotFoundError: If order doesn't exist
        OrderNotOpenError: If the order is closed or cancelled
        OrderItemNotFoundError: If the item isn't part of the order or the id is malformed
        CannotRemoveItemError: If user is neither item owner nor initiator
    """
    order = _lock_open_order(order_id)

    try:
        item = order.items.get(id=item_id)
    except (OrderItem.DoesNotExist, ValidationError):
        raise OrderItemNotFoundError(f"Item {item_id} is not part of this order")

    if item.user_id != user.id and order.initiator_id != user.id:
        raise CannotRemoveItemError("Only the item owner or the order initiator can remove it")

    item.delete()
    logger.info("User %s removed item %s from order %s", user.id, item_id, order.id)


def _finish_order(order_id: UUID, user: User, new_status: str) -> Order:
    try:
        order = Order.objects.select_for_update().get(id=order_id)
    except Order.DoesNotExist:
        raise OrderNotFoundError(f"Order with ID {order_id} not found")

    if order.initiator_id != user.id:
        raise NotInitiatorError("Only the order initiator can close or cancel it")
    if not order.is_open:
        raise OrderNotOpenError(f"Order is already {order.status}")

    order.status = new_status
    order.save(update_fields=['status', 'updated_at'])
    logger.info("Order %s marked %s by user %s", order.id, new_status, user.id)
    return order


@transaction.atomic
def close_order(*, order_id: UUID, user: User) -> Order:
    """
    Close an open order so the receipt can be settled.

    Raises:
        OrderNotFoundError: If order doesn't exist
        NotInitiatorError: If user didn't open the order
        OrderNotOpenError: If the order is already closed or cancelled
    """
    return _finish_order(order_id, user, OrderStatus.CLOSED)


@transaction.atomic
def cancel_order(*, order_id: UUID, user: User) -> Order:
    """
    Cancel an open order.

    Raises:
        OrderNotFoundError: If order doesn't exist
        NotInitiatorError: If user didn't open the order
        OrderNotOpenError: If the order is already closed or cancelled
    """
    return _finish_order(order_id, user, OrderStatus.CANCELLED)
