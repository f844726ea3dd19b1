from pydantic import BaseModel, ConfigDict
from typing import Optional, List, Dict, Any
from decimal import Decimal
from group_ledger.schemas.member_schema import Member, MemberBalance
from group_ledger.schemas.transaction_schema import Transaction
from group_ledger.schemas.settlement_schema import Settlement, SettlementSuggestion


# debtor -> creditor -> amount
BalanceTable = Dict[str, Dict[str, Decimal]]


class LedgerRequest(BaseModel):
    """Materialised group state posted by the calling application"""
    members: List[Member] = []
    transactions: List[Transaction] = []
    settlements: List[Settlement] = []
    viewer_id: Optional[str] = None


class LedgerBalancesOut(BaseModel):
    simplified_balances: BalanceTable
    member_balances: List[MemberBalance]


class LedgerSnapshot(BaseModel):
    model_config = ConfigDict(frozen=True)

    simplified_balances: BalanceTable = {}
    member_balances: List[MemberBalance] = []
    suggestions: List[SettlementSuggestion] = []
    viewer_id: Optional[str] = None


class TraceEvent(BaseModel):
    model_config = ConfigDict(frozen=True)

    stage: str
    message: str
    data: Dict[str, Any] = {}


class LedgerSnapshotDetailed(LedgerSnapshot):
    trace: List[TraceEvent] = []


class GroupSummary(BaseModel):
    total_transactions: int
    total_amount: Decimal
    average_amount: Decimal
    member_count: int
    active_member_count: int
    pending_settlements: int
