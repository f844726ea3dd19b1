from fastapi import APIRouter, HTTPException, Header
from typing import List, Optional
from group_ledger.services.auth.jwt_handler import get_viewer_id
from group_ledger.services.ledger_service import (
    compute_ledger, compute_ledger_detailed, get_group_summary
)
from group_ledger.schemas.ledger_schema import (
    LedgerRequest, LedgerBalancesOut, LedgerSnapshotDetailed, GroupSummary
)
from group_ledger.schemas.settlement_schema import SettlementSuggestion
from group_ledger.utils.validation import SplitValidationError

router = APIRouter(prefix="/ledger", tags=["ledger"])


def resolve_viewer_id(request: LedgerRequest, access_token: Optional[str]) -> Optional[str]:
    """Viewer from the request body, else from the access token"""
    if request.viewer_id:
        return request.viewer_id
    if not access_token:
        return None
    if access_token.startswith("Bearer "):
        access_token = access_token.replace("Bearer ", "")
    viewer_id = get_viewer_id(access_token)
    if not viewer_id:
        raise HTTPException(status_code=401, detail="Invalid token")
    return viewer_id


@router.post("/balances", response_model=LedgerBalancesOut)
def get_balances(request: LedgerRequest):
    """Simplified pairwise balances and per-member totals"""
    try:
        snapshot = compute_ledger(request.members, request.transactions, request.settlements)
    except SplitValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))

    return LedgerBalancesOut(
        simplified_balances=snapshot.simplified_balances,
        member_balances=snapshot.member_balances
    )


@router.post("/suggestions", response_model=List[SettlementSuggestion])
def get_suggestions(
    request: LedgerRequest,
    access_token: Optional[str] = Header(None, description="Access token (without Bearer)")
):
    """Settlement suggestions from the viewer's perspective"""
    viewer_id = resolve_viewer_id(request, access_token)
    if not viewer_id:
        raise HTTPException(status_code=401, detail="Viewer could not be determined")

    try:
        snapshot = compute_ledger(
            request.members, request.transactions, request.settlements, viewer_id=viewer_id
        )
    except SplitValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))

    return snapshot.suggestions


@router.post("/snapshot", response_model=LedgerSnapshotDetailed)
def get_snapshot(
    request: LedgerRequest,
    detailed: bool = False,
    access_token: Optional[str] = Header(None, description="Access token (without Bearer)")
):
    """Full ledger snapshot; detailed=true adds the computation trace"""
    viewer_id = resolve_viewer_id(request, access_token)

    try:
        if detailed:
            snapshot, trace = compute_ledger_detailed(
                request.members, request.transactions, request.settlements, viewer_id=viewer_id
            )
            return LedgerSnapshotDetailed(**snapshot.model_dump(), trace=trace)

        snapshot = compute_ledger(
            request.members, request.transactions, request.settlements, viewer_id=viewer_id
        )
        return LedgerSnapshotDetailed(**snapshot.model_dump())
    except SplitValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))


@router.post("/summary", response_model=GroupSummary)
def get_summary(request: LedgerRequest):
    """Headline statistics for the group"""
    return get_group_summary(request.members, request.transactions, request.settlements)
