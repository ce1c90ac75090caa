"""Pydantic models for the routing HTTP API.

Raw amounts are carried as decimal strings so uint256 values survive JSON.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, model_validator

from aggregator.models.types import Address, Uint256, normalize_address
from aggregator.pools.pool import Pool
from aggregator.routing.types import SolverResult

# Upper bound on work per request
MAX_CHUNKS = 10_000
MAX_POOLS = 100


class PoolSnapshot(BaseModel):
    """A pool with reserves already known to the caller."""

    address: Address
    name: str = Field(min_length=1)
    token0: Address
    token1: Address
    reserve0: Uint256
    reserve1: Uint256

    def to_pool(self) -> Pool:
        return Pool(
            address=self.address,
            token0=self.token0,
            token1=self.token1,
            name=self.name,
            reserve0=int(self.reserve0),
            reserve1=int(self.reserve1),
        )


class RouteRequest(BaseModel):
    """A split-trade routing request."""

    input_token: Address = Field(alias="inputToken")
    output_token: Address | None = Field(default=None, alias="outputToken")
    equivalent_tokens: list[Address] = Field(default_factory=list, alias="equivalentTokens")
    input_decimals: int = Field(default=18, ge=0, le=77, alias="inputDecimals")
    output_decimals: int = Field(default=18, ge=0, le=77, alias="outputDecimals")
    total_input: Uint256 = Field(alias="totalInput")
    num_chunks: int = Field(ge=1, le=MAX_CHUNKS, alias="numChunks")
    pools: list[PoolSnapshot] = Field(max_length=MAX_POOLS)

    model_config = {"populate_by_name": True}

    @model_validator(mode="after")
    def _unique_pool_addresses(self) -> RouteRequest:
        """A pool address identifies one pair, so each may appear only once."""
        seen: set[str] = set()
        for snapshot in self.pools:
            address = normalize_address(snapshot.address)
            if address in seen:
                raise ValueError(f"pool {address} is listed more than once")
            seen.add(address)
        return self


class ChunkRouteModel(BaseModel):
    """One chunk of the routed trade."""

    chunk_index: int = Field(alias="chunkIndex")
    pool_name: str = Field(alias="poolName")
    pool_address: Address | None = Field(default=None, alias="poolAddress")
    amount_in: Uint256 = Field(alias="amountIn")
    amount_out: Uint256 = Field(alias="amountOut")
    amount_in_decimal: str = Field(alias="amountInDecimal")
    amount_out_decimal: str = Field(alias="amountOutDecimal")

    model_config = {"populate_by_name": True}


class RouteResponse(BaseModel):
    """Routing result returned by the API."""

    total_in: Uint256 = Field(alias="totalIn")
    total_out: Uint256 = Field(alias="totalOut")
    total_out_decimal: str = Field(alias="totalOutDecimal")
    chunk_routes: list[ChunkRouteModel] = Field(alias="chunkRoutes")
    pool_usage: dict[str, int] = Field(alias="poolUsage")

    model_config = {"populate_by_name": True}

    @classmethod
    def from_result(cls, result: SolverResult) -> RouteResponse:
        return cls(
            total_in=str(result.total_in),
            total_out=str(result.total_out),
            total_out_decimal=str(result.total_out_decimal),
            chunk_routes=[
                ChunkRouteModel(
                    chunk_index=route.chunk_index,
                    pool_name=route.pool_name,
                    pool_address=route.pool_address,
                    amount_in=str(route.amount_in),
                    amount_out=str(route.amount_out),
                    amount_in_decimal=str(route.amount_in_decimal),
                    amount_out_decimal=str(route.amount_out_decimal),
                )
                for route in result.chunk_routes
            ],
            pool_usage=result.pool_usage(),
        )


__all__ = [
    "ChunkRouteModel",
    "PoolSnapshot",
    "RouteRequest",
    "RouteResponse",
    "MAX_CHUNKS",
    "MAX_POOLS",
]
