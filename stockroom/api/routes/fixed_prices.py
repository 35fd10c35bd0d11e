"""Fixed price catalog endpoints."""

from fastapi import APIRouter, Depends, Query, status

from stockroom.api.dependencies import (
    get_actor,
    get_create_fixed_price_use_case,
    get_delete_fixed_price_use_case,
    get_get_fixed_price_use_case,
    get_list_fixed_prices_use_case,
    get_update_fixed_price_use_case,
)
from stockroom.application.dto.requests import CreateFixedPriceRequest, UpdateFixedPriceRequest
from stockroom.application.dto.responses import (
    ErrorResponse,
    FixedPriceListResponse,
    FixedPriceResponse,
)
from stockroom.application.use_cases import (
    CreateFixedPriceUseCase,
    DeleteFixedPriceUseCase,
    GetFixedPriceUseCase,
    ListFixedPricesUseCase,
    UpdateFixedPriceUseCase,
)
from stockroom.core.entities.activity import Actor
from stockroom.core.entities.stock_item import ItemKind

router = APIRouter(prefix="/api/fixed-prices", tags=["fixed-prices"])


@router.get("", response_model=FixedPriceListResponse)
async def list_fixed_prices(
    kind: ItemKind | None = None,
    category: str | None = None,
    include_inactive: bool = Query(default=False),
    use_case: ListFixedPricesUseCase = Depends(get_list_fixed_prices_use_case),
) -> FixedPriceListResponse:
    """Catalog prices ordered by item name."""
    result = await use_case.execute(
        kind=kind, category=category, include_inactive=include_inactive
    )
    return use_case.to_response(result)


@router.post(
    "",
    response_model=FixedPriceResponse,
    status_code=status.HTTP_201_CREATED,
    responses={409: {"model": ErrorResponse}},
)
async def create_fixed_price(
    request: CreateFixedPriceRequest,
    actor: Actor = Depends(get_actor),
    use_case: CreateFixedPriceUseCase = Depends(get_create_fixed_price_use_case),
) -> FixedPriceResponse:
    result = await use_case.execute(request, actor=actor)
    return use_case.to_response(result)


@router.get(
    "/{price_id}",
    response_model=FixedPriceResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_fixed_price(
    price_id: int,
    use_case: GetFixedPriceUseCase = Depends(get_get_fixed_price_use_case),
) -> FixedPriceResponse:
    result = await use_case.execute(price_id)
    return use_case.to_response(result)


@router.patch(
    "/{price_id}",
    response_model=FixedPriceResponse,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def update_fixed_price(
    price_id: int,
    request: UpdateFixedPriceRequest,
    actor: Actor = Depends(get_actor),
    use_case: UpdateFixedPriceUseCase = Depends(get_update_fixed_price_use_case),
) -> FixedPriceResponse:
    """Change the price, rename the entry or deactivate it."""
    result = await use_case.execute(price_id, request, actor=actor)
    return use_case.to_response(result)


@router.delete(
    "/{price_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={403: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def delete_fixed_price(
    price_id: int,
    actor: Actor = Depends(get_actor),
    use_case: DeleteFixedPriceUseCase = Depends(get_delete_fixed_price_use_case),
) -> None:
    """Delete a catalog price (admin only)."""
    await use_case.execute(price_id, actor=actor)
