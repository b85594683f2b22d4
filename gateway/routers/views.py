# gateway/routers/views.py
# FastAPI router for saved UI views

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends

from gateway.repositories.view_repository import ViewRepository
from gateway.routers.dependencies import get_username, get_view_repository
from gateway.schemas.views import (
    DeleteViewResponse,
    ViewCreateRequest,
    ViewResponse,
    ViewSummary,
    ViewUpdateRequest,
)


router = APIRouter(tags=["Views"])


@router.get("/views", response_model=List[ViewSummary])
async def list_views(
    _: str = Depends(get_username),
    repo: ViewRepository = Depends(get_view_repository),
):
    """Every view's id, meta and name, most recently updated first."""
    return await repo.list_views()


# Registered before /view/{view_id} so "latest" is never taken for an id
@router.get("/view/latest", response_model=ViewResponse)
async def get_latest_view(
    username: str = Depends(get_username),
    repo: ViewRepository = Depends(get_view_repository),
) -> ViewResponse:
    """The user's last updated view, or the most recent system view."""
    view = await repo.get_latest_view(username)
    return ViewResponse(message="Latest view", success=True, view=view)


@router.get("/view/{view_id}", response_model=ViewResponse)
async def get_view(
    view_id: str,
    _: str = Depends(get_username),
    repo: ViewRepository = Depends(get_view_repository),
) -> ViewResponse:
    view = await repo.get_view(view_id)
    if view is None:
        return ViewResponse(message="View not found", success=False, view=None)
    return ViewResponse(message="View found", success=True, view=view)


@router.post("/view", response_model=ViewResponse)
async def create_view(
    payload: ViewCreateRequest,
    username: str = Depends(get_username),
    repo: ViewRepository = Depends(get_view_repository),
) -> ViewResponse:
    view = await repo.create_view(username, payload.name, payload.view)
    if view is None:
        return ViewResponse(message="View not created", success=False, view=None)
    return ViewResponse(message=f"{view['id']} created", success=True, view=view)


@router.put("/view/{view_id}", response_model=ViewResponse)
async def update_view(
    view_id: str,
    payload: ViewUpdateRequest,
    username: str = Depends(get_username),
    repo: ViewRepository = Depends(get_view_repository),
) -> ViewResponse:
    view = await repo.update_view(username, view_id, payload.view)
    if view is None:
        return ViewResponse(message=f"{view_id} not updated", success=False, view=None)
    return ViewResponse(message=f"{view_id} updated", success=True, view=view)


@router.delete("/view/{view_id}", response_model=DeleteViewResponse)
async def delete_view(
    view_id: str,
    username: str = Depends(get_username),
    repo: ViewRepository = Depends(get_view_repository),
) -> DeleteViewResponse:
    result = await repo.delete_view(username, view_id)
    if not result.deleted:
        return DeleteViewResponse(
            message=f"Unable to delete view with ID: {view_id}",
            success=False,
            next_view=None,
        )
    return DeleteViewResponse(
        message="View deleted successfully",
        success=True,
        next_view=result.next_view,
    )
