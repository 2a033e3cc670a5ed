"""
Settlement netting.

Turns per-member owed totals and recorded payments into a short list of
transfers. Debtors pay creditors greedily, largest amounts first, so the
number of transfers never exceeds debtors + creditors - 1.
"""

import logging
from dataclasses import dataclass, field
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Iterable, List

from apps.receipts.services.split_calculation import MemberSplit

logger = logging.getLogger(__name__)

SETTLEMENT_EPSILON = Decimal('0.01')
CENT = Decimal('0.01')


@dataclass(frozen=True)
class PaymentRecord:
    user_id: str
    amount: Decimal


@dataclass(frozen=True)
class Balance:
    """Positive balance is owed money back; negative still has to pay."""

    user_id: str
    user_name: str
    owed: Decimal
    paid: Decimal

    @property
    def balance(self) -> Decimal:
        return self.paid - self.owed


@dataclass(frozen=True)
class Transfer:
    from_user_id: str
    from_user_name: str
    to_user_id: str
    to_user_name: str
    amount: Decimal


@dataclass
class SettlementResult:
    balances: List[Balance] = field(default_factory=list)
    transfers: List[Transfer] = field(default_factory=list)


def compute_settlement(
    member_splits: Iterable[MemberSplit],
    payments: Iterable[PaymentRecord],
) -> SettlementResult:
    """
    Compute balances and the transfers that settle them.

    Several payments by one member are summed. Payments by users who are
    not part of the split are ignored. Reported balances are never
    changed by the netting; it runs on a working copy.
    """
    paid_by_user: Dict[str, Decimal] = {}
    for payment in payments:
        paid_by_user[payment.user_id] = paid_by_user.get(payment.user_id, Decimal('0')) + payment.amount

    balances = [
        Balance(
            user_id=split.user_id,
            user_name=split.user_name,
            owed=split.total,
            paid=paid_by_user.get(split.user_id, Decimal('0')),
        )
        for split in member_splits
    ]

    # Working copy: [balance, remaining]
    debtors = sorted(
        ([b, b.balance] for b in balances if b.balance < -SETTLEMENT_EPSILON),
        key=lambda entry: entry[1]
    )
    creditors = sorted(
        ([b, b.balance] for b in balances if b.balance > SETTLEMENT_EPSILON),
        key=lambda entry: entry[1],
        reverse=True
    )

    transfers = []
    i = j = 0
    while i < len(debtors) and j < len(creditors):
        debtor, creditor = debtors[i], creditors[j]
        amount = min(-debtor[1], creditor[1])

        transfers.append(Transfer(
            from_user_id=debtor[0].user_id,
            from_user_name=debtor[0].user_name,
            to_user_id=creditor[0].user_id,
            to_user_name=creditor[0].user_name,
            amount=amount.quantize(CENT, rounding=ROUND_HALF_UP),
        ))

        debtor[1] += amount
        creditor[1] -= amount

        if abs(debtor[1]) < SETTLEMENT_EPSILON:
            i += 1
        if abs(creditor[1]) < SETTLEMENT_EPSILON:
            j += 1

    logger.debug(
        "Settled %d balance(s) with %d transfer(s): %d debtor(s), %d creditor(s)",
        len(balances), len(transfers), len(debtors), len(creditors)
    )
    return SettlementResult(balances=balances, transfers=transfers)
