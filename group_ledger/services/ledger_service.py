import logging
from decimal import Decimal
from typing import List, Optional, Sequence, Tuple

from group_ledger.config import get_settings
from group_ledger.schemas.member_schema import Member
from group_ledger.schemas.transaction_schema import Transaction
from group_ledger.schemas.settlement_schema import Settlement, SettlementStatus
from group_ledger.schemas.ledger_schema import GroupSummary, LedgerSnapshot, TraceEvent
from group_ledger.utils.ledger_builder import build_debt_table
from group_ledger.utils.balance_simplifier import simplify_balances
from group_ledger.utils.member_balances import aggregate_member_balances
from group_ledger.utils.settlement_suggester import suggest_settlements
from group_ledger.utils.validation import validate_transaction_splits, check_zero_sum
from group_ledger.utils.money import ZERO, round_decimal, zero

logger = logging.getLogger(__name__)


def _resolve_strict(strict: Optional[bool]) -> bool:
    if strict is None:
        return get_settings().strict_split_validation
    return strict


def compute_ledger(
    members: Sequence[Member],
    transactions: Sequence[Transaction],
    settlements: Sequence[Settlement],
    viewer_id: Optional[str] = None,
    strict: Optional[bool] = None
) -> LedgerSnapshot:
    """
    Run the full netting pipeline over one group's state.

    Builder -> Simplifier -> Aggregator -> Suggester. Every call builds a
    fresh snapshot; nothing is cached between calls.

    Args:
        members: Group members, in display order
        transactions: Shared expenses
        settlements: Recorded settlements (cancelled ones are ignored)
        viewer_id: Member whose perspective drives suggestions; no
            suggestions are produced without one
        strict: Validate split sums first (defaults to the
            strict_split_validation setting)

    Returns:
        LedgerSnapshot with simplified balances, member balances and suggestions

    Raises:
        SplitValidationError: In strict mode, if a transaction's splits
            don't sum to its total
    """
    settings = get_settings()
    if _resolve_strict(strict):
        validate_transaction_splits(transactions, settings.balance_tolerance)

    table = build_debt_table(transactions, settlements)
    simplified = simplify_balances(table, settings.money_precision)
    member_balances = aggregate_member_balances(
        members, simplified, transactions, settings.money_precision
    )

    suggestions = []
    if viewer_id is not None:
        suggestions = suggest_settlements(
            viewer_id, member_balances, simplified, settlements, settings.money_precision
        )

    logger.info(
        f"Computed ledger: {len(members)} members, {len(transactions)} transactions, "
        f"{len(settlements)} settlements, {len(suggestions)} suggestions"
    )

    return LedgerSnapshot(
        simplified_balances=simplified,
        member_balances=member_balances,
        suggestions=suggestions,
        viewer_id=viewer_id
    )


def compute_ledger_detailed(
    members: Sequence[Member],
    transactions: Sequence[Transaction],
    settlements: Sequence[Settlement],
    viewer_id: Optional[str] = None,
    strict: Optional[bool] = None
) -> Tuple[LedgerSnapshot, List[TraceEvent]]:
    """
    Same as compute_ledger(), plus a step-by-step trace.

    The trace is assembled here, between stages, so the stages themselves
    stay free of side effects. Useful for debugging and for showing users
    how their balances were derived.

    Returns:
        Tuple of (snapshot, trace_events)
    """
    settings = get_settings()
    trace: List[TraceEvent] = []

    active = [s for s in settlements if s.is_active]
    trace.append(TraceEvent(
        stage="input",
        message="Received group state",
        data={
            "members": len(members),
            "transactions": len(transactions),
            "settlements": len(settlements),
            "active_settlements": len(active),
        }
    ))

    if _resolve_strict(strict):
        validate_transaction_splits(transactions, settings.balance_tolerance)
        trace.append(TraceEvent(stage="validate", message="Split sums match transaction totals"))

    table = build_debt_table(transactions, settlements)
    trace.append(TraceEvent(
        stage="build",
        message="Built pairwise debt table",
        data={"table": {d: {c: str(a) for c, a in row.items()} for d, row in table.items()}}
    ))

    simplified = simplify_balances(table, settings.money_precision)
    trace.append(TraceEvent(
        stage="simplify",
        message="Netted opposing debts",
        data={"simplified": {d: {c: str(a) for c, a in row.items()} for d, row in simplified.items()}}
    ))

    member_balances = aggregate_member_balances(
        members, simplified, transactions, settings.money_precision
    )
    balanced = check_zero_sum(member_balances, settings.balance_tolerance)
    trace.append(TraceEvent(
        stage="aggregate",
        message="Aggregated member balances" if balanced
        else "Aggregated member balances; net balances do not sum to zero",
        data={
            "net_balances": {b.member_id: str(b.net_balance) for b in member_balances},
            "zero_sum": balanced,
        }
    ))
    if not balanced:
        logger.warning("Member net balances do not sum to zero; check transaction splits")

    suggestions = []
    if viewer_id is not None:
        suggestions = suggest_settlements(
            viewer_id, member_balances, simplified, settlements, settings.money_precision
        )
        trace.append(TraceEvent(
            stage="suggest",
            message=f"Suggested {len(suggestions)} settlement(s) for {viewer_id}",
            data={"suggestions": [
                {"from": s.from_id, "to": s.to_id, "amount": str(s.amount), "kind": s.kind.value}
                for s in suggestions
            ]}
        ))

    snapshot = LedgerSnapshot(
        simplified_balances=simplified,
        member_balances=member_balances,
        suggestions=suggestions,
        viewer_id=viewer_id
    )
    return snapshot, trace


def get_group_summary(
    members: Sequence[Member],
    transactions: Sequence[Transaction],
    settlements: Sequence[Settlement]
) -> GroupSummary:
    """Headline statistics for a group"""
    precision = get_settings().money_precision
    total_amount = sum((t.total_amount for t in transactions), ZERO)
    average_amount = zero(precision)
    if transactions:
        average_amount = round_decimal(total_amount / Decimal(len(transactions)), precision)

    return GroupSummary(
        total_transactions=len(transactions),
        total_amount=total_amount,
        average_amount=average_amount,
        member_count=len(members),
        active_member_count=sum(1 for m in members if m.is_active),
        pending_settlements=sum(1 for s in settlements if s.status == SettlementStatus.pending)
    )
