"""Aggregator error classes.

Arithmetic misuse raises the SafeIntError family from aggregator.safe_int;
everything else raised by the aggregator derives from AggregatorError.
"""


class AggregatorError(Exception):
    """Base error for aggregator operations."""

    pass


class ReserveFetchError(AggregatorError):
    """Reserves for a single pool could not be obtained.

    Recoverable: the pool is excluded and routing continues with the rest.
    """

    def __init__(self, pool_address: str, reason: str) -> None:
        super().__init__(f"Failed to fetch reserves for {pool_address}: {reason}")
        self.pool_address = pool_address
        self.reason = reason


class NoRoutesAvailable(AggregatorError):
    """No pool can take the input token, so nothing can be routed."""

    pass


class RoutingInvariantError(AggregatorError):
    """Pricing or reserve update produced an impossible state.

    Indicates a bug rather than a market condition; fatal to the run.
    """

    pass


class PoolDiscoveryError(AggregatorError):
    """A factory lookup for a token pair failed (network or decoding error)."""

    def __init__(self, factory_address: str, reason: str) -> None:
        super().__init__(f"Factory lookup failed on {factory_address}: {reason}")
        self.factory_address = factory_address
        self.reason = reason
