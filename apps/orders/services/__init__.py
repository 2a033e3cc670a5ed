"""
Orders app services layer.

Order lifecycle operations plus the read-only snapshot consumed by the
split calculator.
"""

from .exceptions import (
    OrdersServiceError,
    OrderNotFoundError,
    ActiveOrderExistsError,
    OrderNotOpenError,
    CatalogItemNotFoundError,
    OrderItemNotFoundError,
    NotInitiatorError,
    CannotRemoveItemError,
)

from .order_management import (
    get_order,
    list_user_orders,
    create_order,
    add_items,
    remove_item,
    close_order,
    cancel_order,
)

from .snapshot import (
    AddonCharge,
    OrderLineItem,
    GroupMember,
    OrderSnapshot,
    build_order_snapshot,
)


__all__ = [
    # Exceptions
    'OrdersServiceError',
    'OrderNotFoundError',
    'ActiveOrderExistsError',
    'OrderNotOpenError',
    'CatalogItemNotFoundError',
    'OrderItemNotFoundError',
    'NotInitiatorError',
    'CannotRemoveItemError',

    # Order Management
    'get_order',
    'list_user_orders',
    'create_order',
    'add_items',
    'remove_item',
    'close_order',
    'cancel_order',

    # Snapshot
    'AddonCharge',
    'OrderLineItem',
    'GroupMember',
    'OrderSnapshot',
    'build_order_snapshot',
]
