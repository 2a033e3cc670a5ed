"""
Receipts app services layer.

Receipt persistence plus the split calculator that turns an order and
its receipt into per-member totals.
"""

from .exceptions import (
    ReceiptsServiceError,
    ReceiptNotFoundError,
    InvalidAdjustmentError,
)

from .split_calculation import (
    ManualExtraItem,
    ReceiptOverlay,
    ReceiptRecord,
    SplitItem,
    MemberSplit,
    SplitResult,
    compute_split,
)

from .receipt_management import (
    build_receipt_record,
    get_split,
    get_receipt,
    get_receipt_for_order,
    create_manual_receipt,
    update_receipt,
)


__all__ = [
    # Exceptions
    'ReceiptsServiceError',
    'ReceiptNotFoundError',
    'InvalidAdjustmentError',

    # Split Calculation
    'ManualExtraItem',
    'ReceiptOverlay',
    'ReceiptRecord',
    'SplitItem',
    'MemberSplit',
    'SplitResult',
    'compute_split',

    # Receipt Management
    'build_receipt_record',
    'get_split',
    'get_receipt',
    'get_receipt_for_order',
    'create_manual_receipt',
    'update_receipt',
]
