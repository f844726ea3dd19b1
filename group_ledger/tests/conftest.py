"""
Pytest configuration and fixtures for group_ledger tests.
"""
import pytest
from decimal import Decimal

from group_ledger.config import get_settings
from group_ledger.schemas.settlement_schema import Settlement, SettlementStatus
from group_ledger.tests.factories import make_members, make_transaction


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Each test sees settings built from its own environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def members_abc():
    return make_members("A", "B", "C")


@pytest.fixture
def single_payer_transactions():
    """A pays 90, split equally between B and C (A's own share is zero)."""
    return [make_transaction("T1", "A", {"A": "0", "B": "45", "C": "45"})]


@pytest.fixture
def partial_settlement():
    """B has paid A 20."""
    return Settlement(
        id="S1",
        from_id="B",
        to_id="A",
        amount=Decimal("20"),
        status=SettlementStatus.completed
    )


@pytest.fixture
def cancelled_settlement():
    return Settlement(
        id="S1",
        from_id="B",
        to_id="A",
        amount=Decimal("20"),
        status=SettlementStatus.cancelled
    )


@pytest.fixture
def third_party_debt():
    """A, B, C, D where only C owes D 30."""
    members = make_members("A", "B", "C", "D")
    transactions = [make_transaction("T1", "D", {"D": "0", "C": "30"})]
    return members, transactions


@pytest.fixture
def mixed_group():
    """Four members with overlapping expenses in several directions."""
    members = make_members("A", "B", "C", "D")
    transactions = [
        make_transaction("T1", "A", {"A": "40", "B": "40", "C": "40"}),
        make_transaction("T2", "B", {"B": "20", "C": "20", "D": "20"}),
        make_transaction("T3", "C", {"A": "10", "C": "10", "D": "10.50"}),
        make_transaction("T4", "D", {"A": "33.33", "B": "33.33", "D": "33.34"}),
    ]
    settlements = [
        Settlement(id="S1", from_id="C", to_id="A", amount=Decimal("15"), status=SettlementStatus.completed),
        Settlement(id="S2", from_id="D", to_id="B", amount=Decimal("5"), status=SettlementStatus.pending),
        Settlement(id="S3", from_id="B", to_id="A", amount=Decimal("100"), status=SettlementStatus.cancelled),
    ]
    return members, transactions, settlements
