"""
Settlement Suggester

Proposes who should pay whom, from the point of view of one viewing member.
This is deliberately not a group-wide minimum-transaction solver: it answers
"what should I do" for the viewer, or "what should the others do" when the
viewer is already square.

Three mutually exclusive cases, chosen by the viewer's net balance:

- viewer owes (net < 0): pay each creditor whom the viewer directly owes,
  capped at that creditor's net credit.            kind = you_owe
- viewer is owed (net > 0): each debtor who directly owes the viewer pays,
  capped at the viewer's net credit.               kind = owed_to_you
- viewer is balanced (net == 0): walk debtors against creditors, paying down
  each debtor's remaining debt along existing pairwise debts.  kind = others

Suggestions for a directed pair that already has a non-cancelled settlement
on record are dropped, whatever the amounts.
"""

import logging
from decimal import Decimal
from typing import Dict, Iterable, List, Sequence, Set, Tuple

from group_ledger.schemas.member_schema import MemberBalance
from group_ledger.schemas.settlement_schema import Settlement, SettlementSuggestion, SuggestionKind
from group_ledger.utils.balance_simplifier import SimplifiedBalanceTable
from group_ledger.utils.money import ZERO, CENTS, round_decimal

logger = logging.getLogger(__name__)


def _exact(simplified: SimplifiedBalanceTable, debtor: str, creditor: str) -> Decimal:
    return simplified.get(debtor, {}).get(creditor, ZERO)


def _suggestions_for_debtor_viewer(
    viewer_id: str,
    balances: Sequence[MemberBalance],
    simplified: SimplifiedBalanceTable,
    precision: Decimal
) -> List[SettlementSuggestion]:
    suggestions = []
    for creditor in balances:
        if creditor.member_id == viewer_id or creditor.net_balance <= ZERO:
            continue
        exact = _exact(simplified, viewer_id, creditor.member_id)
        if exact <= ZERO:
            continue
        amount = round_decimal(min(exact, creditor.net_balance), precision)
        if amount > ZERO:
            suggestions.append(SettlementSuggestion(
                from_id=viewer_id,
                to_id=creditor.member_id,
                amount=amount,
                kind=SuggestionKind.you_owe
            ))
    return suggestions


def _suggestions_for_creditor_viewer(
    viewer_id: str,
    viewer_net: Decimal,
    balances: Sequence[MemberBalance],
    simplified: SimplifiedBalanceTable,
    precision: Decimal
) -> List[SettlementSuggestion]:
    suggestions = []
    for debtor in balances:
        if debtor.member_id == viewer_id or debtor.net_balance >= ZERO:
            continue
        exact = _exact(simplified, debtor.member_id, viewer_id)
        if exact <= ZERO:
            continue
        amount = round_decimal(min(exact, viewer_net), precision)
        if amount > ZERO:
            suggestions.append(SettlementSuggestion(
                from_id=debtor.member_id,
                to_id=viewer_id,
                amount=amount,
                kind=SuggestionKind.owed_to_you
            ))
    return suggestions


def _suggestions_between_others(
    viewer_id: str,
    balances: Sequence[MemberBalance],
    simplified: SimplifiedBalanceTable,
    precision: Decimal
) -> List[SettlementSuggestion]:
    debtors = [b for b in balances if b.member_id != viewer_id and b.net_balance < ZERO]
    creditors = [b for b in balances if b.member_id != viewer_id and b.net_balance > ZERO]

    suggestions = []
    for debtor in debtors:
        remaining = abs(debtor.net_balance)
        for creditor in creditors:
            if remaining <= ZERO:
                break
            exact = _exact(simplified, debtor.member_id, creditor.member_id)
            if exact <= ZERO:
                continue
            amount = round_decimal(min(remaining, creditor.net_balance, exact), precision)
            if amount <= ZERO:
                continue
            suggestions.append(SettlementSuggestion(
                from_id=debtor.member_id,
                to_id=creditor.member_id,
                amount=amount,
                kind=SuggestionKind.others
            ))
            remaining -= amount
    return suggestions


def settled_pairs(settlements: Iterable[Settlement]) -> Set[Tuple[str, str]]:
    """Directed (from_id, to_id) pairs that already have an active settlement"""
    return {(s.from_id, s.to_id) for s in settlements if s.is_active}


def suggest_settlements(
    viewer_id: str,
    member_balances: Sequence[MemberBalance],
    simplified: SimplifiedBalanceTable,
    settlements: Iterable[Settlement] = (),
    precision: Decimal = CENTS
) -> List[SettlementSuggestion]:
    """
    Suggest settlement payments from the viewer's perspective.

    Args:
        viewer_id: Member looking at the ledger; an id missing from
            member_balances is treated as balanced
        member_balances: Output of aggregate_member_balances(), in order
        simplified: Output of simplify_balances()
        settlements: Recorded settlements; active ones suppress suggestions
            for the same directed pair
        precision: Rounding precision for suggested amounts

    Returns:
        Ordered list of SettlementSuggestion

    Example:
        >>> suggest_settlements("B", balances, {"B": {"A": Decimal("45.00")}})
        [SettlementSuggestion(from_id='B', to_id='A', amount=Decimal('45.00'), kind=<SuggestionKind.you_owe: 'you_owe'>)]
    """
    viewer_net = ZERO
    for balance in member_balances:
        if balance.member_id == viewer_id:
            viewer_net = balance.net_balance
            break

    if viewer_net < ZERO:
        suggestions = _suggestions_for_debtor_viewer(viewer_id, member_balances, simplified, precision)
    elif viewer_net > ZERO:
        suggestions = _suggestions_for_creditor_viewer(
            viewer_id, viewer_net, member_balances, simplified, precision
        )
    else:
        suggestions = _suggestions_between_others(viewer_id, member_balances, simplified, precision)

    already_settled = settled_pairs(settlements)
    filtered = [s for s in suggestions if (s.from_id, s.to_id) not in already_settled]

    if len(filtered) < len(suggestions):
        logger.debug(
            f"Dropped {len(suggestions) - len(filtered)} suggestion(s) already covered by a settlement"
        )
    return filtered
