"""Activity feed endpoint."""

from fastapi import APIRouter, Depends, Query

from stockroom.api.dependencies import get_list_activities_use_case
from stockroom.application.dto.responses import ActivityListResponse
from stockroom.application.use_cases import ListActivitiesUseCase

router = APIRouter(prefix="/api/activities", tags=["activities"])


@router.get("", response_model=ActivityListResponse)
async def list_activities(
    limit: int = Query(default=50, ge=1, le=500),
    use_case: ListActivitiesUseCase = Depends(get_list_activities_use_case),
) -> ActivityListResponse:
    """Most recent activity, newest first."""
    result = await use_case.execute(limit=limit)
    return use_case.to_response(result)
