"""
Balance Simplifier

Collapses the two debt directions of every member pair into a single
one-way debt. The result never holds both simplified[A][B] and
simplified[B][A], and every amount is positive and rounded to cents.

Rounding happens here and only here, so later stages work on the same
rounded figures and errors don't compound.
"""

import logging
from decimal import Decimal
from typing import Set, Tuple

from group_ledger.utils.ledger_builder import PairwiseDebtTable
from group_ledger.utils.money import ZERO, CENTS, round_decimal

logger = logging.getLogger(__name__)

SimplifiedBalanceTable = PairwiseDebtTable


def simplify_balances(
    table: PairwiseDebtTable,
    precision: Decimal = CENTS
) -> SimplifiedBalanceTable:
    """
    Net out opposing debts for each unordered pair of members.

    Args:
        table: Raw pairwise table from build_debt_table()
        precision: Rounding precision for the emitted amounts (default: cents)

    Returns:
        debtor -> creditor -> positive rounded amount

    Example:
        >>> simplify_balances({"A": {"B": Decimal("30")}, "B": {"A": Decimal("10")}})
        {'A': {'B': Decimal('20.00')}}
    """
    simplified: SimplifiedBalanceTable = {}
    visited: Set[Tuple[str, str]] = set()

    for member_a, row in table.items():
        for member_b in row:
            if (member_a, member_b) in visited:
                continue
            visited.add((member_a, member_b))
            visited.add((member_b, member_a))

            ab = table.get(member_a, {}).get(member_b, ZERO)
            ba = table.get(member_b, {}).get(member_a, ZERO)
            net = ab - ba

            if net > ZERO:
                debtor, creditor, amount = member_a, member_b, round_decimal(net, precision)
            elif net < ZERO:
                debtor, creditor, amount = member_b, member_a, round_decimal(-net, precision)
            else:
                continue

            # Sub-cent residue nets to nothing
            if amount <= ZERO:
                continue

            simplified.setdefault(debtor, {})[creditor] = amount
            logger.debug(f"Simplified {member_a}<->{member_b}: {debtor} owes {creditor} {amount}")

    return simplified
