"""Data models for the aggregator.

API request/response models live in aggregator.models.route; they are not
re-exported here because they depend on the pool and routing packages.
"""

from aggregator.models.types import (
    ZERO_ADDRESS,
    Address,
    Uint256,
    is_valid_address,
    normalize_address,
)

__all__ = [
    "ZERO_ADDRESS",
    "Address",
    "Uint256",
    "is_valid_address",
    "normalize_address",
]
