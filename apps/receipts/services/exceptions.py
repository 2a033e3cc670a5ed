"""
Domain-specific exceptions for receipts app.
"""


class ReceiptsServiceError(Exception):
    """Base exception for all receipts service errors."""
    pass


class ReceiptNotFoundError(ReceiptsServiceError):
    """Raised when a receipt does not exist or is not visible to the user."""
    pass


class InvalidAdjustmentError(ReceiptsServiceError):
    """Raised when an override or manual extra item does not fit the order."""
    pass
