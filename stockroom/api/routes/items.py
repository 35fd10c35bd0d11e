"""Stock item endpoints: products and raw materials."""

from fastapi import APIRouter, Depends, Query, status

from stockroom.api.dependencies import (
    get_actor,
    get_adjust_stock_use_case,
    get_create_item_use_case,
    get_delete_item_use_case,
    get_get_item_use_case,
    get_list_items_use_case,
    get_update_item_use_case,
)
from stockroom.application.dto.requests import (
    AdjustStockRequest,
    CreateStockItemRequest,
    UpdateStockItemRequest,
)
from stockroom.application.dto.responses import (
    ErrorResponse,
    StockItemListResponse,
    StockItemResponse,
)
from stockroom.application.use_cases import (
    AdjustStockUseCase,
    CreateStockItemUseCase,
    DeleteStockItemUseCase,
    GetStockItemUseCase,
    ListStockItemsUseCase,
    UpdateStockItemUseCase,
)
from stockroom.core.entities.activity import Actor
from stockroom.core.entities.stock_item import ItemKind, StockStatus

router = APIRouter(prefix="/api/items", tags=["items"])


@router.get("", response_model=StockItemListResponse)
async def list_items(
    kind: ItemKind | None = None,
    status_filter: StockStatus | None = Query(default=None, alias="status"),
    limit: int = Query(default=100, ge=1, le=1000),
    offset: int = Query(default=0, ge=0),
    use_case: ListStockItemsUseCase = Depends(get_list_items_use_case),
) -> StockItemListResponse:
    """List products and raw materials, optionally filtered by kind and status."""
    result = await use_case.execute(kind=kind, status=status_filter, limit=limit, offset=offset)
    return use_case.to_response(result)


@router.post(
    "",
    response_model=StockItemResponse,
    status_code=status.HTTP_201_CREATED,
    responses={409: {"model": ErrorResponse}},
)
async def create_item(
    request: CreateStockItemRequest,
    actor: Actor = Depends(get_actor),
    use_case: CreateStockItemUseCase = Depends(get_create_item_use_case),
) -> StockItemResponse:
    """Add an item; the SKU is assigned from its kind's sequence when omitted."""
    result = await use_case.execute(request, actor=actor)
    return use_case.to_response(result)


@router.get(
    "/{item_id}",
    response_model=StockItemResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_item(
    item_id: int,
    use_case: GetStockItemUseCase = Depends(get_get_item_use_case),
) -> StockItemResponse:
    result = await use_case.execute(item_id)
    return use_case.to_response(result)


@router.patch(
    "/{item_id}",
    response_model=StockItemResponse,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def update_item(
    item_id: int,
    request: UpdateStockItemRequest,
    actor: Actor = Depends(get_actor),
    use_case: UpdateStockItemUseCase = Depends(get_update_item_use_case),
) -> StockItemResponse:
    """Edit descriptive fields or reorder level. Use /adjust to change quantity."""
    result = await use_case.execute(item_id, request, actor=actor)
    return use_case.to_response(result)


@router.delete(
    "/{item_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={403: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def delete_item(
    item_id: int,
    actor: Actor = Depends(get_actor),
    use_case: DeleteStockItemUseCase = Depends(get_delete_item_use_case),
) -> None:
    """Delete an item (admin only)."""
    await use_case.execute(item_id, actor=actor)


@router.post(
    "/{item_id}/adjust",
    response_model=StockItemResponse,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
)
async def adjust_stock(
    item_id: int,
    request: AdjustStockRequest,
    actor: Actor = Depends(get_actor),
    use_case: AdjustStockUseCase = Depends(get_adjust_stock_use_case),
) -> StockItemResponse:
    """Add (positive delta) or remove (negative delta) stock."""
    result = await use_case.execute(item_id, request.delta, reason=request.reason, actor=actor)
    return use_case.to_response(result)
