from pydantic import BaseModel, ConfigDict
from typing import Optional
from decimal import Decimal


class Member(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    display_name: str
    is_active: bool = True
    email: Optional[str] = None


class MemberBalance(BaseModel):
    """Aggregate position of one member: positive net_balance means others owe them"""
    model_config = ConfigDict(frozen=True)

    member_id: str
    display_name: Optional[str] = None
    total_paid: Decimal = Decimal("0")
    total_owed: Decimal = Decimal("0")
    net_balance: Decimal = Decimal("0")
    transaction_count: int = 0
