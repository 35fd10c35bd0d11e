"""Work order (production) endpoints."""

from fastapi import APIRouter, Depends, Query, status

from stockroom.api.dependencies import (
    get_actor,
    get_cancel_work_order_use_case,
    get_complete_work_order_use_case,
    get_create_work_order_use_case,
    get_delete_work_order_use_case,
    get_get_work_order_use_case,
    get_list_work_orders_use_case,
    get_update_work_order_status_use_case,
)
from stockroom.application.dto.requests import (
    CreateWorkOrderRequest,
    UpdateWorkOrderStatusRequest,
)
from stockroom.application.dto.responses import (
    ErrorResponse,
    WorkOrderListResponse,
    WorkOrderResponse,
)
from stockroom.application.use_cases import (
    CancelWorkOrderUseCase,
    CompleteWorkOrderUseCase,
    CreateWorkOrderUseCase,
    DeleteWorkOrderUseCase,
    GetWorkOrderUseCase,
    ListWorkOrdersUseCase,
    UpdateWorkOrderStatusUseCase,
)
from stockroom.core.entities.activity import Actor

router = APIRouter(prefix="/api/work-orders", tags=["work-orders"])


@router.get("", response_model=WorkOrderListResponse)
async def list_active_work_orders(
    limit: int = Query(default=100, ge=1, le=1000),
    offset: int = Query(default=0, ge=0),
    use_case: ListWorkOrdersUseCase = Depends(get_list_work_orders_use_case),
) -> WorkOrderListResponse:
    """Pending and in-progress work orders."""
    result = await use_case.execute(history=False, limit=limit, offset=offset)
    return use_case.to_response(result)


@router.get("/history", response_model=WorkOrderListResponse)
async def list_work_order_history(
    limit: int = Query(default=100, ge=1, le=1000),
    offset: int = Query(default=0, ge=0),
    use_case: ListWorkOrdersUseCase = Depends(get_list_work_orders_use_case),
) -> WorkOrderListResponse:
    """Completed and cancelled work orders."""
    result = await use_case.execute(history=True, limit=limit, offset=offset)
    return use_case.to_response(result)


@router.post(
    "",
    response_model=WorkOrderResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
)
async def create_work_order(
    request: CreateWorkOrderRequest,
    actor: Actor = Depends(get_actor),
    use_case: CreateWorkOrderUseCase = Depends(get_create_work_order_use_case),
) -> WorkOrderResponse:
    """Deduct materials and open a pending work order.

    If any material is short, nothing is deducted.
    """
    result = await use_case.execute(request, actor=actor)
    return use_case.to_response(result)


@router.get(
    "/{order_id}",
    response_model=WorkOrderResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_work_order(
    order_id: int,
    use_case: GetWorkOrderUseCase = Depends(get_get_work_order_use_case),
) -> WorkOrderResponse:
    result = await use_case.execute(order_id)
    return use_case.to_response(result)


@router.patch(
    "/{order_id}/status",
    response_model=WorkOrderResponse,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def update_work_order_status(
    order_id: int,
    request: UpdateWorkOrderStatusRequest,
    actor: Actor = Depends(get_actor),
    use_case: UpdateWorkOrderStatusUseCase = Depends(get_update_work_order_status_use_case),
) -> WorkOrderResponse:
    result = await use_case.execute(order_id, request.status, actor=actor)
    return use_case.to_response(result)


@router.post(
    "/{order_id}/complete",
    response_model=WorkOrderResponse,
    responses={404: {"model": ErrorResponse}},
)
async def complete_work_order(
    order_id: int,
    actor: Actor = Depends(get_actor),
    use_case: CompleteWorkOrderUseCase = Depends(get_complete_work_order_use_case),
) -> WorkOrderResponse:
    """Credit the finished product and move the order to history."""
    result = await use_case.execute(order_id, actor=actor)
    return use_case.to_response(result)


@router.post(
    "/{order_id}/cancel",
    response_model=WorkOrderResponse,
    responses={404: {"model": ErrorResponse}},
)
async def cancel_work_order(
    order_id: int,
    actor: Actor = Depends(get_actor),
    use_case: CancelWorkOrderUseCase = Depends(get_cancel_work_order_use_case),
) -> WorkOrderResponse:
    result = await use_case.execute(order_id, actor=actor)
    return use_case.to_response(result)


@router.delete(
    "/{order_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={403: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def delete_work_order(
    order_id: int,
    actor: Actor = Depends(get_actor),
    use_case: DeleteWorkOrderUseCase = Depends(get_delete_work_order_use_case),
) -> None:
    """Discard an active work order without returning materials (admin only)."""
    await use_case.execute(order_id, actor=actor)
