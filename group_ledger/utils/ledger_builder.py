"""
Ledger Builder

Turns shared-expense transactions and recorded settlements into a raw
pairwise debt table:

    table[debtor][creditor] = amount

Each split charged to a member other than the payer adds to what that member
owes the payer. Each non-cancelled settlement subtracts from what the sender
owes the recipient, so an entry can go negative (an overpayment). Negative
entries are resolved by the simplifier; nothing is rounded here.
"""

import logging
from decimal import Decimal
from typing import Dict, Iterable

from group_ledger.schemas.transaction_schema import Transaction
from group_ledger.schemas.settlement_schema import Settlement
from group_ledger.utils.money import ZERO

logger = logging.getLogger(__name__)

PairwiseDebtTable = Dict[str, Dict[str, Decimal]]


def _add(table: PairwiseDebtTable, debtor: str, creditor: str, amount: Decimal) -> None:
    row = table.setdefault(debtor, {})
    row[creditor] = row.get(creditor, ZERO) + amount


def build_debt_table(
    transactions: Iterable[Transaction],
    settlements: Iterable[Settlement]
) -> PairwiseDebtTable:
    """
    Build the raw debtor -> creditor -> amount table.

    Args:
        transactions: Shared expenses, each with a payer and per-member splits
        settlements: Recorded payments; cancelled ones are ignored

    Returns:
        Nested dict of unrounded amounts, possibly negative

    Example:
        >>> t = Transaction(id="t1", payer_id="A", total_amount=Decimal("90"),
        ...                 splits=[Split(member_id="B", amount=Decimal("45")),
        ...                         Split(member_id="C", amount=Decimal("45"))])
        >>> build_debt_table([t], [])
        {'B': {'A': Decimal('45')}, 'C': {'A': Decimal('45')}}
    """
    table: PairwiseDebtTable = {}

    for transaction in transactions:
        payer_id = transaction.payer_id
        for split in transaction.splits:
            # The payer is never charged against themselves
            if split.member_id == payer_id:
                continue
            _add(table, split.member_id, payer_id, split.amount)

    for settlement in settlements:
        if not settlement.is_active:
            continue
        if settlement.amount <= ZERO:
            logger.warning(
                f"Ignoring settlement {settlement.id} with non-positive amount {settlement.amount}"
            )
            continue
        _add(table, settlement.from_id, settlement.to_id, -settlement.amount)

    return table
