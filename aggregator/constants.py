"""Network constants for the swap aggregator.

Centralizes well-known Polygon addresses and protocol parameters.
"""

from aggregator.models.types import is_valid_address, normalize_address


def _validate_address(name: str, address: str) -> str:
    """Validate an address and return it normalized to lowercase.

    Raises:
        ValueError: If the address is invalid
    """
    if not is_valid_address(address):
        raise ValueError(f"Invalid {name} address: {address} (must be 0x + 40 hex chars)")
    return normalize_address(address)


# Constant product fee: 0.3% of the input stays in the pool
FEE_NUMERATOR = 997
FEE_DENOMINATOR = 1000

# Polygon tokens (lowercase for consistency)
# All addresses are validated at import time to catch typos early
USDC = _validate_address("USDC", "0x3c499c542cEF5E3811e1192ce70d8cC03d5c3359")
USDC_E = _validate_address("USDC.e", "0x2791bca1f2de4661ed88a30c99a7a9449aa84174")  # bridged
WETH = _validate_address("WETH", "0x7ceB23fD6bC0adD59E62ac25578270cFf1b9f619")

USDC_DECIMALS = 6
WETH_DECIMALS = 18

TOKEN_SYMBOLS = {
    USDC: "USDC",
    USDC_E: "USDC.e",
    WETH: "WETH",
}

# UniswapV2-style factories on Polygon
QUICKSWAP_V2_FACTORY = _validate_address(
    "Quickswap factory", "0x5757371414417b8C6CAad45bAeF941aBc7d3Ab32"
)
SUSHISWAP_V2_FACTORY = _validate_address(
    "Sushiswap factory", "0xc35DADB65012eC5796536bD9864eD8773aBc74C4"
)

# Pools not discoverable through a configured factory
UNISWAP_V2_USDC_WETH_POOL = _validate_address(
    "Uniswap V2 USDC/WETH pool", "0x67473ebdBFD1e6Fc4367462d55eD1eE56e1963FA"
)

# Default trade: 1,000,000 USDC split into 100 chunks
DEFAULT_TOTAL_INPUT = "1000000"
DEFAULT_NUM_CHUNKS = 100

DEFAULT_RPC_URL = "https://polygon-rpc.com"
