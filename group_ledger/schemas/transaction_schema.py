from pydantic import BaseModel, ConfigDict, Field
from typing import List
from decimal import Decimal
from group_ledger.utils.money import MAX_DIGITS, DECIMAL_PLACES


class Split(BaseModel):
    model_config = ConfigDict(frozen=True)

    member_id: str
    amount: Decimal = Field(..., max_digits=MAX_DIGITS, decimal_places=DECIMAL_PLACES)


class Transaction(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    payer_id: str
    splits: List[Split] = []
    total_amount: Decimal = Field(..., max_digits=MAX_DIGITS, decimal_places=DECIMAL_PLACES)
