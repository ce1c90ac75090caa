"""Command line entry point: discover pools, route the trade, print a report.

Usage:
    aggregator --total-input 1000000 --num-chunks 100
    AGGREGATOR_RPC_URL=https://polygon-rpc.com aggregator
"""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace

import structlog

from aggregator.chain.discovery import ChainClient, discover_pools
from aggregator.config import AggregatorConfig
from aggregator.errors import NoRoutesAvailable
from aggregator.routing.report import average_price, format_report
from aggregator.routing.splitter import ChunkRouter

EXIT_OK = 0
EXIT_NO_ROUTES = 1


def configure_logging(level: str) -> None:
    """Send structlog output to stderr at the given level."""
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(getattr(logging, level.upper())),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="aggregator",
        description="Split a swap into chunks and route them across UniswapV2-style pools",
    )
    parser.add_argument("--rpc-url", help="RPC endpoint (default: $AGGREGATOR_RPC_URL)")
    parser.add_argument(
        "--total-input",
        help="Total input in token units (default: $AGGREGATOR_TOTAL_INPUT or 1000000)",
    )
    parser.add_argument(
        "--num-chunks",
        type=int,
        help="Number of chunks (default: $AGGREGATOR_NUM_CHUNKS or 100)",
    )
    parser.add_argument("--preview", type=int, default=5, help="Chunk routes to print")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level for diagnostics on stderr",
    )
    return parser


def main(argv: list[str] | None = None, chain: ChainClient | None = None) -> int:
    """Run the aggregator.

    Args:
        argv: Command line arguments (default: sys.argv[1:])
        chain: Chain client to use instead of a Web3ChainClient

    Returns:
        Process exit code
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    try:
        config = AggregatorConfig.from_env()
        overrides: dict[str, object] = {}
        if args.rpc_url:
            overrides["rpc_url"] = args.rpc_url
        if args.total_input is not None:
            overrides["total_input"] = args.total_input
        if args.num_chunks is not None:
            overrides["num_chunks"] = args.num_chunks
        config = replace(config, **overrides)
    except ValueError as e:
        parser.error(str(e))

    if chain is None:
        from aggregator.chain.web3_client import Web3ChainClient

        chain = Web3ChainClient(config.rpc_url)

    report = discover_pools(
        chain,
        static_pools=config.static_pools,
        factory_pools=config.factory_pools,
        symbols=dict(config.symbols),
    )
    for failure in report.failures:
        print(f"Pool unavailable: {failure.source}: {failure.error}", file=sys.stderr)

    if not report.has_pools:
        print("Failed to obtain data for any pool; nothing to route.", file=sys.stderr)
        return EXIT_NO_ROUTES

    router = ChunkRouter(
        input_token=config.input_token,
        equivalent_tokens=config.equivalent_tokens,
        input_decimals=config.input_decimals,
        output_decimals=config.output_decimals,
        output_token=config.output_token,
    )
    try:
        result = router.run(config.total_input_raw, config.num_chunks, report.pools)
    except NoRoutesAvailable as e:
        print(f"No routes available: {e}", file=sys.stderr)
        return EXIT_NO_ROUTES

    print(
        format_report(
            result,
            input_symbol=config.input_symbol,
            output_symbol=config.output_symbol,
            input_decimals=config.input_decimals,
            preview=args.preview,
        )
    )
    price = average_price(result, config.input_decimals, config.output_decimals)
    print(f"Average price: {price:.12f} {config.output_symbol} per {config.input_symbol}")
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
