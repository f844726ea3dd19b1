"""
Member Balance Aggregator

Derives each member's totals from the simplified table:

- total_owed: what the member must pay others (their row)
- total_paid: what others must pay the member (their column)
- net_balance = total_paid - total_owed

Positive net_balance means the member is a creditor, negative a debtor.
"""

import logging
from decimal import Decimal
from typing import Dict, Iterable, List, Optional, Sequence

from group_ledger.schemas.member_schema import Member, MemberBalance
from group_ledger.schemas.transaction_schema import Transaction
from group_ledger.utils.balance_simplifier import SimplifiedBalanceTable
from group_ledger.utils.money import CENTS, zero

logger = logging.getLogger(__name__)


def count_member_transactions(transactions: Iterable[Transaction]) -> Dict[str, int]:
    """Count, per member id, the transactions they paid for or were split into"""
    counts: Dict[str, int] = {}
    for transaction in transactions:
        involved = {transaction.payer_id}
        involved.update(split.member_id for split in transaction.splits)
        for member_id in involved:
            counts[member_id] = counts.get(member_id, 0) + 1
    return counts


def aggregate_member_balances(
    members: Sequence[Member],
    simplified: SimplifiedBalanceTable,
    transactions: Optional[Iterable[Transaction]] = None,
    precision: Decimal = CENTS
) -> List[MemberBalance]:
    """
    Compute one MemberBalance per member, creditors first.

    Members with no debts in either direction still get an all-zero entry.
    The sort is stable, so members with equal net_balance keep the order in
    which they were passed.

    Args:
        members: Group members, in the caller's display order
        simplified: Output of simplify_balances()
        transactions: When given, fills in transaction_count
        precision: Decimal places carried by zero totals, matching the
            simplified amounts

    Returns:
        List of MemberBalance sorted by net_balance, descending
    """
    counts = count_member_transactions(transactions) if transactions is not None else {}
    zero_amount = zero(precision)

    # Column sums: what everyone else owes each creditor
    receivable: Dict[str, Decimal] = {}
    for row in simplified.values():
        for creditor, amount in row.items():
            receivable[creditor] = receivable.get(creditor, zero_amount) + amount

    balances = []
    for member in members:
        total_owed = sum(simplified.get(member.id, {}).values(), zero_amount)
        total_paid = receivable.get(member.id, zero_amount)
        balances.append(MemberBalance(
            member_id=member.id,
            display_name=member.display_name,
            total_paid=total_paid,
            total_owed=total_owed,
            net_balance=total_paid - total_owed,
            transaction_count=counts.get(member.id, 0)
        ))

    balances.sort(key=lambda balance: balance.net_balance, reverse=True)
    return balances
