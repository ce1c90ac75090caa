"""Base class for two-token pool pricing."""

from abc import ABC, abstractmethod


class AMM(ABC):
    """Pricing curve of a two-token pool.

    Holds no pool state: reserves are passed on every call, so one instance
    prices any number of pools and every method is pure.
    """

    @staticmethod
    def is_empty(reserve_in: int, reserve_out: int) -> bool:
        """A pool missing liquidity on either side cannot price a swap."""
        return reserve_in <= 0 or reserve_out <= 0

    @abstractmethod
    def get_amount_out(self, amount_in: int, reserve_in: int, reserve_out: int) -> int:
        """Output received for selling amount_in into the pool."""

    @abstractmethod
    def get_amount_in(self, amount_out: int, reserve_in: int, reserve_out: int) -> int:
        """Smallest input that yields at least amount_out."""
