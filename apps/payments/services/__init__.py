"""
Payments app services layer.

Recording payments and netting them against the receipt split.
"""

from .exceptions import (
    PaymentsServiceError,
    InvalidPaymentError,
)

from .settlement import (
    SETTLEMENT_EPSILON,
    PaymentRecord,
    Balance,
    Transfer,
    SettlementResult,
    compute_settlement,
)

from .payment_management import (
    record_payments,
    list_payments,
    calculate_settlement,
)


__all__ = [
    # Exceptions
    'PaymentsServiceError',
    'InvalidPaymentError',

    # Settlement
    'SETTLEMENT_EPSILON',
    'PaymentRecord',
    'Balance',
    'Transfer',
    'SettlementResult',
    'compute_settlement',

    # Payment Management
    'record_payments',
    'list_payments',
    'calculate_settlement',
]
