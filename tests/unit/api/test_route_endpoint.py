"""Unit tests for the /route endpoint."""

import pytest
from fastapi.testclient import TestClient

from aggregator import __version__
from aggregator.api.endpoints import get_router_factory
from aggregator.api.main import MAX_REQUEST_SIZE, app
from aggregator.errors import RoutingInvariantError
from tests.helpers import DAI, POOL_A, POOL_B, USDC, USDC_E, WETH


@pytest.fixture
def client():
    """Create a test client for the API."""
    yield TestClient(app)
    app.dependency_overrides.clear()


def _pool(address, name, reserve0, reserve1, token0=USDC, token1=WETH):
    return {
        "address": address,
        "name": name,
        "token0": token0,
        "token1": token1,
        "reserve0": str(reserve0),
        "reserve1": str(reserve1),
    }


def _request(**overrides):
    body = {
        "inputToken": USDC,
        "equivalentTokens": [USDC_E],
        "inputDecimals": 6,
        "outputDecimals": 18,
        "totalInput": "20000",
        "numChunks": 2,
        "pools": [
            _pool(POOL_A, "Pool A", 100_000, 100_000),
            _pool(POOL_B, "Pool B", 50_000, 50_000),
        ],
    }
    body.update(overrides)
    return body


class TestRouteSuccess:
    def test_routes_across_pools(self, client):
        response = client.post("/route", json=_request())

        assert response.status_code == 200
        data = response.json()
        assert data["totalIn"] == "20000"
        assert data["totalOut"] == "17378"
        assert [c["poolName"] for c in data["chunkRoutes"]] == ["Pool A", "Pool B"]
        assert [c["amountOut"] for c in data["chunkRoutes"]] == ["9066", "8312"]
        assert data["chunkRoutes"][0]["chunkIndex"] == 1
        assert data["chunkRoutes"][0]["poolAddress"] == POOL_A
        assert data["poolUsage"] == {"Pool A": 1, "Pool B": 1}

    def test_single_chunk_golden_vector(self, client):
        response = client.post("/route", json=_request(totalInput="10000", numChunks=1))

        assert response.status_code == 200
        assert response.json()["totalOut"] == "9066"

    def test_zero_liquidity_chunks(self, client):
        body = _request(pools=[_pool(POOL_A, "Empty", 0, 0)])

        response = client.post("/route", json=body)

        assert response.status_code == 200
        data = response.json()
        assert data["totalOut"] == "0"
        assert all(c["poolName"] == "" for c in data["chunkRoutes"])
        assert all(c["poolAddress"] is None for c in data["chunkRoutes"])
        assert data["poolUsage"] == {}

    def test_snake_case_fields_accepted(self, client):
        body = {
            "input_token": USDC,
            "total_input": "10000",
            "num_chunks": 1,
            "pools": [_pool(POOL_A, "Pool A", 100_000, 100_000)],
        }

        response = client.post("/route", json=body)

        assert response.status_code == 200
        assert response.json()["totalOut"] == "9066"

    def test_output_token_filters_pools(self, client):
        body = _request(
            outputToken=WETH,
            pools=[
                _pool(POOL_A, "USDC/DAI", 10**9, 10**9, token1=DAI),
                _pool(POOL_B, "Pool B", 50_000, 50_000),
            ],
        )

        response = client.post("/route", json=body)

        assert response.status_code == 200
        assert response.json()["poolUsage"] == {"Pool B": 2}


class TestRouteErrors:
    def test_no_pool_holds_input(self, client):
        body = _request(pools=[_pool(POOL_A, "DAI/WETH", 1_000, 1_000, token0=DAI)])

        response = client.post("/route", json=body)

        assert response.status_code == 422
        assert "no routes available" in response.json()["detail"]

    def test_empty_pool_list(self, client):
        response = client.post("/route", json=_request(pools=[]))

        assert response.status_code == 422
        assert "no routes available" in response.json()["detail"]

    def test_identical_tokens(self, client):
        body = _request(pools=[_pool(POOL_A, "Broken", 1, 1, token0=USDC, token1=USDC)])

        response = client.post("/route", json=body)

        assert response.status_code == 422

    def test_duplicate_pool_address(self, client):
        """The same pair listed twice must not be routed as double liquidity."""
        body = _request(
            totalInput="100000",
            numChunks=10,
            pools=[
                _pool(POOL_A, "Pool A", 100_000, 100_000),
                _pool(POOL_A.upper().replace("0X", "0x"), "Pool A again", 100_000, 100_000),
            ],
        )

        response = client.post("/route", json=body)

        assert response.status_code == 422
        assert "listed more than once" in str(response.json()["detail"])

    def test_single_listing_of_same_pool(self, client):
        body = _request(
            totalInput="100000", numChunks=10, pools=[_pool(POOL_A, "Pool A", 100_000, 100_000)]
        )

        response = client.post("/route", json=body)

        assert response.status_code == 200
        assert response.json()["totalOut"] == "49895"

    @pytest.mark.parametrize(
        "overrides",
        [
            {"numChunks": 0},
            {"totalInput": "-1"},
            {"totalInput": "abc"},
            {"inputToken": "not-an-address"},
            {"inputDecimals": 78},
        ],
    )
    def test_schema_validation(self, client, overrides):
        response = client.post("/route", json=_request(**overrides))

        assert response.status_code == 422

    def test_invariant_error_returns_500(self, client):
        class BrokenRouter:
            def __init__(self, **kwargs):
                pass

            def run(self, total_input_amount, num_chunks, pools):
                raise RoutingInvariantError("reserve drained")

        app.dependency_overrides[get_router_factory] = lambda: BrokenRouter

        response = client.post("/route", json=_request())

        assert response.status_code == 500
        assert response.json()["detail"] == "internal routing error"

    def test_request_too_large(self, client):
        response = client.post(
            "/route",
            json=_request(),
            headers={"Content-Length": str(MAX_REQUEST_SIZE + 1)},
        )

        assert response.status_code == 413
        assert response.json()["detail"] == "Request too large"


class TestHealth:
    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok", "version": __version__}
