"""Tests for the command line entry point."""

import pytest

from aggregator.cli import EXIT_NO_ROUTES, EXIT_OK, build_parser, main
from aggregator.constants import (
    QUICKSWAP_V2_FACTORY,
    SUSHISWAP_V2_FACTORY,
    UNISWAP_V2_USDC_WETH_POOL,
    USDC,
    USDC_E,
    WETH,
)
from tests.helpers import POOL_B, POOL_C, MockChain


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in ("AGGREGATOR_RPC_URL", "AGGREGATOR_TOTAL_INPUT", "AGGREGATOR_NUM_CHUNKS"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def chain():
    """Three USDC/WETH pools of different depth, one on bridged USDC.e."""
    return MockChain(
        reserves={
            # (USDC raw, WETH raw): ~2000 USDC per WETH
            UNISWAP_V2_USDC_WETH_POOL: (2_000_000 * 10**6, 1_000 * 10**18),
            POOL_B: (1_000_000 * 10**6, 500 * 10**18),
            # USDC.e sorts before WETH too
            POOL_C: (500_000 * 10**6, 250 * 10**18),
        },
        pairs={
            (QUICKSWAP_V2_FACTORY, USDC, WETH): POOL_B,
            (SUSHISWAP_V2_FACTORY, USDC_E, WETH): POOL_C,
        },
    )


class TestParser:
    def test_defaults(self):
        args = build_parser().parse_args([])
        assert args.rpc_url is None
        assert args.total_input is None
        assert args.num_chunks is None
        assert args.preview == 5
        assert args.log_level == "WARNING"

    def test_rejects_unknown_log_level(self):
        with pytest.raises(SystemExit) as exc_info:
            build_parser().parse_args(["--log-level", "LOUD"])
        assert exc_info.value.code == 2


class TestMain:
    def test_routes_and_prints_report(self, chain, capsys):
        code = main(["--total-input", "10000", "--num-chunks", "10"], chain=chain)

        out = capsys.readouterr().out
        assert code == EXIT_OK
        assert "Chunks processed: 10" in out
        assert "Total input: 10000 USDC" in out
        assert "Pool usage:" in out
        assert "Uniswap V2 USDC/WETH" in out
        assert "Average price:" in out
        assert "WETH per USDC" in out

    def test_missing_factory_pair_is_tolerated(self, chain, capsys):
        """Sushiswap USDC/WETH does not exist on the mock chain."""
        code = main(["--total-input", "100", "--num-chunks", "2"], chain=chain)

        assert code == EXIT_OK
        assert "Sushiswap USDC/WETH" not in capsys.readouterr().out

    def test_environment_supplies_defaults(self, chain, capsys, monkeypatch):
        monkeypatch.setenv("AGGREGATOR_NUM_CHUNKS", "4")
        monkeypatch.setenv("AGGREGATOR_TOTAL_INPUT", "50")

        code = main([], chain=chain)

        assert code == EXIT_OK
        assert "Chunks processed: 4" in capsys.readouterr().out

    def test_reserve_failures_reported_on_stderr(self, capsys):
        chain = MockChain(
            reserves={POOL_B: (10**12, 10**21)},
            failures={UNISWAP_V2_USDC_WETH_POOL: "connection refused"},
            pairs={(QUICKSWAP_V2_FACTORY, USDC, WETH): POOL_B},
        )

        code = main(["--total-input", "100", "--num-chunks", "2"], chain=chain)

        captured = capsys.readouterr()
        assert code == EXIT_OK
        assert "Pool unavailable: Uniswap V2 USDC/WETH: connection refused" in captured.err
        assert "Quickswap USDC/WETH: 2 chunks (100.0%)" in captured.out

    def test_no_pools_exits_nonzero(self, capsys):
        code = main(["--num-chunks", "2"], chain=MockChain())

        captured = capsys.readouterr()
        assert code == EXIT_NO_ROUTES
        assert "Failed to obtain data for any pool" in captured.err
        assert captured.out == ""

    def test_invalid_chunk_count_is_usage_error(self, chain):
        with pytest.raises(SystemExit) as exc_info:
            main(["--num-chunks", "0"], chain=chain)
        assert exc_info.value.code == 2

    def test_invalid_total_is_usage_error(self, chain):
        with pytest.raises(SystemExit) as exc_info:
            main(["--total-input", "-5"], chain=chain)
        assert exc_info.value.code == 2

    def test_debug_logging_goes_to_stderr(self, chain, capsys):
        main(["--total-input", "100", "--num-chunks", "1", "--log-level", "DEBUG"], chain=chain)

        captured = capsys.readouterr()
        assert "routing_complete" in captured.err
        assert "routing_complete" not in captured.out
