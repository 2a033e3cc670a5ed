"""
Domain-specific exceptions for orders app.

Views translate these into HTTP responses.
"""


class OrdersServiceError(Exception):
    """Base exception for all orders service errors."""
    pass


class OrderNotFoundError(OrdersServiceError):
    """Raised when an order does not exist or is not visible to the user."""
    pass


class ActiveOrderExistsError(OrdersServiceError):
    """Raised when a group already has an open order."""
    pass


class OrderNotOpenError(OrdersServiceError):
    """Raised when items are changed on a closed or cancelled order."""
    pass


class CatalogItemNotFoundError(OrdersServiceError):
    """Raised when a menu item, variant or addon is not on the restaurant's menu."""
    pass


class OrderItemNotFoundError(OrdersServiceError):
    """Raised when an item is not part of the order."""
    pass


class NotInitiatorError(OrdersServiceError):
    """Raised when only the order initiator may perform the action."""
    pass


class CannotRemoveItemError(OrdersServiceError):
    """Raised when a member removes an item that is not theirs."""
    pass
