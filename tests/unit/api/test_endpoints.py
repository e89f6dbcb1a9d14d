"""Tests for the pool engine HTTP endpoints."""

from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient

from amm.api.endpoints import get_engine
from amm.api.main import app
from amm.engine import Engine
from amm.ledger import InMemoryLedger
from tests.helpers import ADMIN, ALICE, BOB, MOJO, ONE_BILLION, TREASURY, USDC, fund


@pytest.fixture
def engine() -> Engine:
    """A fresh engine per test instead of the process-wide default."""
    return Engine(ledger=InMemoryLedger())


@pytest.fixture
def client(engine: Engine) -> Iterator[TestClient]:
    app.dependency_overrides[get_engine] = lambda: engine
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def seeded_client(client: TestClient, engine: Engine) -> TestClient:
    """Configured platform with a 1e9/1e9 MOJO/USDC pool owned by ALICE."""
    client.post(
        "/platform",
        json={"caller": ADMIN, "fee_rate_bps": 250, "base_asset": MOJO, "fee_collector": TREASURY},
    )
    client.post("/pairs", json={"caller": ADMIN, "asset_a": MOJO, "asset_b": USDC})
    fund(engine.ledger, ALICE, MOJO=ONE_BILLION, USDC=ONE_BILLION)
    client.post(
        "/pairs/MOJO/USDC/liquidity",
        json={"caller": ALICE, "amount_a": str(ONE_BILLION), "amount_b": str(ONE_BILLION)},
    )
    return client


class TestPlatformEndpoints:
    """Tests for /platform routes."""

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "ok"

    def test_configure_and_get(self, client):
        response = client.post(
            "/platform",
            json={"caller": ADMIN, "fee_rate_bps": 10_000, "base_asset": MOJO, "fee_collector": TREASURY},
        )
        assert response.status_code == 201
        assert response.json()["admin"] == ADMIN

        data = client.get("/platform").json()
        assert data["protocol_fee_rate_bps"] == 10_000
        assert data["paused"] is False

    def test_pause(self, seeded_client):
        response = seeded_client.post("/platform/pause", json={"caller": ADMIN, "pause": True})
        assert response.status_code == 200
        assert response.json()["paused"] is True
        assert response.json()["pause_count"] == 1

    def test_stats(self, seeded_client):
        data = seeded_client.get("/platform/stats").json()
        assert data == {"pair_count": 1, "total_volume": "0", "total_fees": "0"}


class TestPairEndpoints:
    """Tests for /pairs routes."""

    def test_create_and_get_pair(self, seeded_client):
        data = seeded_client.get("/pairs/MOJO/USDC").json()
        assert data["reserve_a"] == str(ONE_BILLION)
        assert data["share_supply_total"] == str(ONE_BILLION)

    def test_add_liquidity_returns_effects(self, seeded_client, engine):
        fund(engine.ledger, BOB, MOJO=500, USDC=500)
        response = seeded_client.post(
            "/pairs/MOJO/USDC/liquidity",
            json={"caller": BOB, "amount_a": "500", "amount_b": "500"},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["shares"] == "500"
        assert [e["kind"] for e in data["effects"]] == ["transfer", "transfer", "mint_shares"]

    def test_remove_liquidity(self, seeded_client):
        response = seeded_client.post(
            "/pairs/MOJO/USDC/liquidity/remove",
            json={"caller": ALICE, "share_amount": str(ONE_BILLION)},
        )
        assert response.status_code == 200
        assert response.json()["pair"]["reserve_a"] == "0"

    def test_swap(self, seeded_client, engine):
        fund(engine.ledger, BOB, MOJO=10_000_000)
        response = seeded_client.post(
            "/pairs/MOJO/USDC/swap",
            json={
                "caller": BOB,
                "amount_in": "10000000",
                "min_amount_out": "9655856",
                "input_is_asset_a": True,
            },
        )
        assert response.status_code == 200
        data = response.json()
        assert data["protocol_fee"] == "250000"
        assert data["amount_out"] == "9655856"
        assert data["pair"]["reserve_b"] == "990344144"
        assert data["effects"][0]["destination"] == TREASURY

    def test_quote(self, seeded_client):
        response = seeded_client.get(
            "/pairs/MOJO/USDC/quote", params={"amount_in": 10_000_000, "input_is_asset_a": "false"}
        )
        assert response.status_code == 200
        data = response.json()
        assert data["asset_in"] == USDC
        assert data["amount_out"] == "9655856"
