"""
Domain-specific exceptions for payments app.
"""


class PaymentsServiceError(Exception):
    """Base exception for all payments service errors."""
    pass


class InvalidPaymentError(PaymentsServiceError):
    """Raised when a payment names a user outside the order's group."""
    pass
