"""
API tests for the /ledger routes.
"""
import jwt
import pytest
from decimal import Decimal
from fastapi.testclient import TestClient

from group_ledger.main import app


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def group_payload():
    """A pays 90 for B and C; B has since paid A 20."""
    return {
        "members": [
            {"id": "A", "display_name": "Alice"},
            {"id": "B", "display_name": "Bob"},
            {"id": "C", "display_name": "Chen", "is_active": False},
        ],
        "transactions": [
            {
                "id": "T1",
                "payer_id": "A",
                "total_amount": "90",
                "splits": [
                    {"member_id": "A", "amount": "0"},
                    {"member_id": "B", "amount": "45"},
                    {"member_id": "C", "amount": "45"},
                ],
            }
        ],
        "settlements": [
            {"id": "S1", "from_id": "B", "to_id": "A", "amount": "20", "status": "completed"}
        ],
    }


def make_token(user_id: str, secret: str = "your_secret_key") -> str:
    return jwt.encode({"user_id": user_id}, secret, algorithm="HS256")


@pytest.mark.integration
class TestLedgerRoutes:

    def test_health(self, client):
        assert client.get("/health").json() == {"status": "healthy"}

    def test_balances(self, client, group_payload):
        response = client.post("/ledger/balances", json=group_payload)
        assert response.status_code == 200

        body = response.json()
        assert Decimal(body["simplified_balances"]["B"]["A"]) == Decimal("25")
        assert Decimal(body["simplified_balances"]["C"]["A"]) == Decimal("45")
        assert [(b["member_id"], Decimal(b["net_balance"])) for b in body["member_balances"]] == [
            ("A", Decimal("70")), ("B", Decimal("-25")), ("C", Decimal("-45"))
        ]
        assert body["member_balances"][0]["display_name"] == "Alice"

    def test_suggestions_for_viewer_in_body(self, client, group_payload):
        group_payload["viewer_id"] = "C"
        response = client.post("/ledger/suggestions", json=group_payload)
        assert response.status_code == 200
        suggestions = response.json()
        assert len(suggestions) == 1
        assert suggestions[0]["from_id"] == "C"
        assert suggestions[0]["to_id"] == "A"
        assert Decimal(suggestions[0]["amount"]) == Decimal("45")
        assert suggestions[0]["kind"] == "you_owe"

    def test_suggestions_for_viewer_in_token(self, client, group_payload):
        response = client.post(
            "/ledger/suggestions",
            json=group_payload,
            headers={"access-token": f"Bearer {make_token('A')}"}
        )
        assert response.status_code == 200
        # B -> A is already covered by S1
        assert [(s["from_id"], s["kind"]) for s in response.json()] == [("C", "owed_to_you")]

    def test_suggestions_without_viewer(self, client, group_payload):
        response = client.post("/ledger/suggestions", json=group_payload)
        assert response.status_code == 401

    def test_suggestions_with_invalid_token(self, client, group_payload):
        response = client.post(
            "/ledger/suggestions",
            json=group_payload,
            headers={"access-token": make_token("A", secret="wrong")}
        )
        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid token"

    def test_snapshot(self, client, group_payload):
        group_payload["viewer_id"] = "B"
        body = client.post("/ledger/snapshot", json=group_payload).json()
        assert body["viewer_id"] == "B"
        assert body["suggestions"] == []
        assert body["trace"] == []

    def test_snapshot_detailed(self, client, group_payload):
        group_payload["viewer_id"] = "A"
        response = client.post("/ledger/snapshot", params={"detailed": "true"}, json=group_payload)
        assert response.status_code == 200
        stages = [event["stage"] for event in response.json()["trace"]]
        assert stages == ["input", "build", "simplify", "aggregate", "suggest"]

    def test_strict_validation_maps_to_422(self, client, group_payload, monkeypatch):
        monkeypatch.setenv("GROUP_LEDGER_STRICT_SPLIT_VALIDATION", "true")
        group_payload["transactions"][0]["total_amount"] = "100"
        response = client.post("/ledger/balances", json=group_payload)
        assert response.status_code == 422
        assert "T1" in response.json()["detail"]

    def test_summary(self, client, group_payload):
        body = client.post("/ledger/summary", json=group_payload).json()
        assert body["total_transactions"] == 1
        assert Decimal(body["total_amount"]) == Decimal("90")
        assert body["member_count"] == 3
        assert body["active_member_count"] == 2
        assert body["pending_settlements"] == 0

    def test_zero_totals_serialized_with_cents(self, client, group_payload):
        body = client.post("/ledger/balances", json=group_payload).json()
        alice = body["member_balances"][0]
        assert alice["total_paid"] == "70.00"
        assert alice["total_owed"] == "0.00"

    @pytest.mark.parametrize("amount", ["1E+27", "0.0000001"])
    def test_out_of_range_amount_is_422(self, client, group_payload, amount):
        group_payload["viewer_id"] = "B"
        group_payload["transactions"][0]["total_amount"] = amount
        group_payload["transactions"][0]["splits"][1]["amount"] = amount
        response = client.post("/ledger/balances", json=group_payload)
        assert response.status_code == 422

    def test_out_of_range_settlement_is_422(self, client, group_payload):
        group_payload["settlements"][0]["amount"] = "1E+27"
        response = client.post("/ledger/snapshot", json=group_payload)
        assert response.status_code == 422

    def test_malformed_payload(self, client):
        response = client.post("/ledger/balances", json={"members": [{"id": "A"}]})
        assert response.status_code == 422
