"""API endpoints for the swap aggregator."""

import asyncio
from collections.abc import Callable

import structlog
from fastapi import APIRouter, Depends, HTTPException

from aggregator.errors import NoRoutesAvailable, RoutingInvariantError
from aggregator.models.route import RouteRequest, RouteResponse
from aggregator.routing.splitter import ChunkRouter
from aggregator.routing.types import SolverResult

logger = structlog.get_logger()

router = APIRouter()

RouterFactory = Callable[..., ChunkRouter]


def get_router_factory() -> RouterFactory:
    """Dependency provider for the chunk router constructor.

    Override this in tests to inject a different router:
        app.dependency_overrides[get_router_factory] = lambda: FakeRouter
    """
    return ChunkRouter


def _route(request: RouteRequest, factory: RouterFactory) -> SolverResult:
    chunk_router = factory(
        input_token=request.input_token,
        equivalent_tokens=request.equivalent_tokens,
        input_decimals=request.input_decimals,
        output_decimals=request.output_decimals,
        output_token=request.output_token,
    )
    pools = [snapshot.to_pool() for snapshot in request.pools]
    return chunk_router.run(int(request.total_input), request.num_chunks, pools)


@router.post("/route", response_model_by_alias=True)
async def route(
    request: RouteRequest,
    factory: RouterFactory = Depends(get_router_factory),
) -> RouteResponse:
    """Split a trade into chunks and route each to the best pool.

    Error Handling:
        - Invalid request schema: 422 (Pydantic)
        - Invalid pool definition (e.g. identical tokens): 422
        - No pool holds the input token: 422 with "no routes available"
        - Internal invariant violation: 500, logged with traceback
    """
    logger.info(
        "received_route_request",
        input_token=request.input_token,
        total_input=request.total_input,
        num_chunks=request.num_chunks,
        pool_count=len(request.pools),
    )

    loop = asyncio.get_running_loop()
    try:
        result = await loop.run_in_executor(None, _route, request, factory)
    except NoRoutesAvailable as e:
        logger.warning("no_routes_available", input_token=request.input_token, reason=str(e))
        raise HTTPException(status_code=422, detail=f"no routes available: {e}") from e
    except RoutingInvariantError as e:
        logger.exception("routing_invariant_violated", input_token=request.input_token)
        raise HTTPException(status_code=500, detail="internal routing error") from e
    except ValueError as e:
        logger.warning("invalid_route_request", error=str(e))
        raise HTTPException(status_code=422, detail=str(e)) from e

    logger.info(
        "returning_route",
        total_output=result.total_out,
        pools_used=len(result.pool_usage()),
    )
    return RouteResponse.from_result(result)
