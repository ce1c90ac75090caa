"""Address and amount types shared by the aggregator.

Addresses are lowercase 0x-prefixed hex strings everywhere inside the
package. Raw amounts cross the API as decimal strings so that uint256
values survive JSON.
"""

import re
from typing import Annotated, Any

from pydantic import BeforeValidator, Field

from aggregator.safe_int import UINT256_MAX

_ADDRESS_RE = re.compile(r"^0x[0-9a-fA-F]{40}$")

# Returned by factories for pairs that do not exist
ZERO_ADDRESS = "0x" + "0" * 40


def validate_uint256(value: Any) -> str:
    """Coerce a str or int amount to a canonical uint256 decimal string.

    Raises:
        ValueError: On non-integers, negative values or values above 2^256-1
    """
    if isinstance(value, bool) or not isinstance(value, str | int):
        raise ValueError(f"Uint256 must be a decimal string or int, got {type(value).__name__}")
    try:
        amount = int(value)
    except ValueError as err:
        raise ValueError(f"Uint256 must be a decimal integer: '{value}'") from err
    if not 0 <= amount <= UINT256_MAX:
        raise ValueError(f"Uint256 out of range: {value}")
    return str(amount)


Address = Annotated[str, Field(pattern=_ADDRESS_RE.pattern)]

Uint256 = Annotated[
    str,
    BeforeValidator(validate_uint256),
    Field(description="256-bit unsigned integer as decimal string"),
]


def is_valid_address(address: str) -> bool:
    return isinstance(address, str) and _ADDRESS_RE.match(address) is not None


def normalize_address(address: str, *, validate: bool = False) -> str:
    """Lowercase an address and make sure it carries the 0x prefix.

    Raises:
        ValueError: If validate is set and the result is not a valid address
    """
    normalized = address.lower()
    if not normalized.startswith("0x"):
        normalized = "0x" + normalized
    if validate and not is_valid_address(normalized):
        raise ValueError(f"Invalid address: {address}")
    return normalized


def address_key(address: str) -> int:
    """Numeric value of an address, the ordering pair contracts sort tokens by."""
    return int(normalize_address(address), 16)
