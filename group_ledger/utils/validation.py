from decimal import Decimal
from typing import Iterable

from group_ledger.schemas.member_schema import MemberBalance
from group_ledger.schemas.transaction_schema import Transaction
from group_ledger.utils.money import ZERO, CENTS


class SplitValidationError(ValueError):
    """A transaction's splits don't add up to its total"""

    def __init__(self, transaction_id: str, split_total: Decimal, total_amount: Decimal):
        self.transaction_id = transaction_id
        self.split_total = split_total
        self.total_amount = total_amount
        super().__init__(
            f"Splits of transaction {transaction_id} sum to {split_total}, "
            f"expected {total_amount}"
        )


def validate_transaction_splits(
    transactions: Iterable[Transaction],
    tolerance: Decimal = CENTS
) -> None:
    """
    Check that every transaction's split amounts sum to its total_amount.

    Raises:
        SplitValidationError: On the first transaction off by more than tolerance
    """
    for transaction in transactions:
        split_total = sum((split.amount for split in transaction.splits), ZERO)
        if abs(split_total - transaction.total_amount) > tolerance:
            raise SplitValidationError(transaction.id, split_total, transaction.total_amount)


def check_zero_sum(member_balances: Iterable[MemberBalance], tolerance: Decimal = CENTS) -> bool:
    """
    Return True when the net balances sum to zero within tolerance.

    In a consistent ledger no money is created or destroyed, so every
    creditor's claim is matched by someone's debt.
    """
    total = sum((balance.net_balance for balance in member_balances), ZERO)
    return abs(total) <= tolerance
