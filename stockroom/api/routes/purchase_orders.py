"""Purchase order endpoints."""

from fastapi import APIRouter, Depends, Query, status

from stockroom.api.dependencies import (
    get_actor,
    get_create_purchase_order_use_case,
    get_delete_purchase_order_use_case,
    get_generate_purchase_orders_use_case,
    get_get_purchase_order_use_case,
    get_list_purchase_orders_use_case,
    get_update_purchase_order_use_case,
)
from stockroom.application.dto.requests import (
    CreatePurchaseOrderRequest,
    UpdatePurchaseOrderRequest,
)
from stockroom.application.dto.responses import (
    ErrorResponse,
    GeneratePurchaseOrdersResponse,
    PurchaseOrderListResponse,
    PurchaseOrderResponse,
)
from stockroom.application.use_cases import (
    CreatePurchaseOrderUseCase,
    DeletePurchaseOrderUseCase,
    GenerateLowStockPurchaseOrdersUseCase,
    GetPurchaseOrderUseCase,
    ListPurchaseOrdersUseCase,
    UpdatePurchaseOrderUseCase,
)
from stockroom.core.entities.activity import Actor
from stockroom.core.entities.purchase_order import PurchaseOrderStatus

router = APIRouter(prefix="/api/purchase-orders", tags=["purchase-orders"])


@router.get("", response_model=PurchaseOrderListResponse)
async def list_purchase_orders(
    status_filter: PurchaseOrderStatus | None = Query(default=None, alias="status"),
    supplier: str | None = None,
    limit: int = Query(default=100, ge=1, le=1000),
    offset: int = Query(default=0, ge=0),
    use_case: ListPurchaseOrdersUseCase = Depends(get_list_purchase_orders_use_case),
) -> PurchaseOrderListResponse:
    result = await use_case.execute(
        status=status_filter, supplier=supplier, limit=limit, offset=offset
    )
    return use_case.to_response(result)


@router.post(
    "",
    response_model=PurchaseOrderResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def create_purchase_order(
    request: CreatePurchaseOrderRequest,
    actor: Actor = Depends(get_actor),
    use_case: CreatePurchaseOrderUseCase = Depends(get_create_purchase_order_use_case),
) -> PurchaseOrderResponse:
    """Raise a purchase order; the PO number is assigned automatically."""
    result = await use_case.execute(request, actor=actor)
    return use_case.to_response(result)


@router.post("/generate-low-stock", response_model=GeneratePurchaseOrdersResponse)
async def generate_low_stock_purchase_orders(
    actor: Actor = Depends(get_actor),
    use_case: GenerateLowStockPurchaseOrdersUseCase = Depends(
        get_generate_purchase_orders_use_case
    ),
) -> GeneratePurchaseOrdersResponse:
    """One purchase order per supplier for raw materials at or below reorder level."""
    result = await use_case.execute(actor=actor)
    return use_case.to_response(result)


@router.get(
    "/{order_id}",
    response_model=PurchaseOrderResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_purchase_order(
    order_id: int,
    use_case: GetPurchaseOrderUseCase = Depends(get_get_purchase_order_use_case),
) -> PurchaseOrderResponse:
    result = await use_case.execute(order_id)
    return use_case.to_response(result)


@router.patch(
    "/{order_id}",
    response_model=PurchaseOrderResponse,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def update_purchase_order(
    order_id: int,
    request: UpdatePurchaseOrderRequest,
    actor: Actor = Depends(get_actor),
    use_case: UpdatePurchaseOrderUseCase = Depends(get_update_purchase_order_use_case),
) -> PurchaseOrderResponse:
    """Change status and/or edit notes and expected delivery date."""
    result = await use_case.execute(order_id, request, actor=actor)
    return use_case.to_response(result)


@router.delete(
    "/{order_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={403: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def delete_purchase_order(
    order_id: int,
    actor: Actor = Depends(get_actor),
    use_case: DeletePurchaseOrderUseCase = Depends(get_delete_purchase_order_use_case),
) -> None:
    """Delete a purchase order (admin only)."""
    await use_case.execute(order_id, actor=actor)
