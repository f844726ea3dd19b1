from pydantic import BaseModel, ConfigDict, Field
from decimal import Decimal
from enum import Enum
from group_ledger.utils.money import MAX_DIGITS, DECIMAL_PLACES


class SettlementStatus(str, Enum):
    pending = "pending"
    completed = "completed"
    cancelled = "cancelled"


class SuggestionKind(str, Enum):
    you_owe = "you_owe"
    owed_to_you = "owed_to_you"
    others = "others"


class Settlement(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    from_id: str
    to_id: str
    amount: Decimal = Field(..., max_digits=MAX_DIGITS, decimal_places=DECIMAL_PLACES)
    status: SettlementStatus = SettlementStatus.pending

    @property
    def is_active(self) -> bool:
        """Cancelled settlements take no part in netting"""
        return self.status != SettlementStatus.cancelled


class SettlementSuggestion(BaseModel):
    model_config = ConfigDict(frozen=True)

    from_id: str
    to_id: str
    amount: Decimal
    kind: SuggestionKind
