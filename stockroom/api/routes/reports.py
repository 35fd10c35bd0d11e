"""Report endpoints."""

from fastapi import APIRouter, Depends, status

from stockroom.api.dependencies import (
    get_actor,
    get_delete_saved_report_use_case,
    get_get_saved_report_use_case,
    get_inventory_summary_use_case,
    get_list_saved_reports_use_case,
    get_low_stock_report_use_case,
    get_save_report_use_case,
)
from stockroom.application.dto.requests import SaveReportRequest
from stockroom.application.dto.responses import (
    ErrorResponse,
    InventorySummaryResponse,
    LowStockReportResponse,
    SavedReportListResponse,
    SavedReportResponse,
)
from stockroom.application.use_cases import (
    DeleteSavedReportUseCase,
    GetSavedReportUseCase,
    InventorySummaryUseCase,
    ListSavedReportsUseCase,
    LowStockReportUseCase,
    SaveReportUseCase,
)
from stockroom.core.entities.activity import Actor

router = APIRouter(prefix="/api/reports", tags=["reports"])


@router.get("/low-stock", response_model=LowStockReportResponse)
async def low_stock_report(
    use_case: LowStockReportUseCase = Depends(get_low_stock_report_use_case),
) -> LowStockReportResponse:
    """Items at or below their reorder level, with suggested reorder quantities."""
    result = await use_case.execute()
    return use_case.to_response(result)


@router.get("/inventory-summary", response_model=InventorySummaryResponse)
async def inventory_summary(
    use_case: InventorySummaryUseCase = Depends(get_inventory_summary_use_case),
) -> InventorySummaryResponse:
    """Item counts, stock value and status breakdown per kind."""
    result = await use_case.execute()
    return use_case.to_response(result)


@router.get("/saved", response_model=SavedReportListResponse)
async def list_saved_reports(
    use_case: ListSavedReportsUseCase = Depends(get_list_saved_reports_use_case),
) -> SavedReportListResponse:
    """The 50 most recently saved reports."""
    result = await use_case.execute()
    return use_case.to_response(result)


@router.post(
    "/saved",
    response_model=SavedReportResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
)
async def save_report(
    request: SaveReportRequest,
    actor: Actor = Depends(get_actor),
    use_case: SaveReportUseCase = Depends(get_save_report_use_case),
) -> SavedReportResponse:
    """Save a report. Without content, the current report of that type is captured."""
    result = await use_case.execute(request, actor=actor)
    return use_case.to_response(result)


@router.get(
    "/saved/{report_id}",
    response_model=SavedReportResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def get_saved_report(
    report_id: int,
    use_case: GetSavedReportUseCase = Depends(get_get_saved_report_use_case),
) -> SavedReportResponse:
    result = await use_case.execute(report_id)
    return use_case.to_response(result)


@router.delete(
    "/saved/{report_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={403: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def delete_saved_report(
    report_id: int,
    actor: Actor = Depends(get_actor),
    use_case: DeleteSavedReportUseCase = Depends(get_delete_saved_report_use_case),
) -> None:
    """Delete a saved report (admin only)."""
    await use_case.execute(report_id, actor=actor)
