"""Media item endpoints scoped to the authenticated owner."""

from typing import Any

from fastapi import APIRouter, Body, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_uid, get_db
from app.schema.media import DeleteResponse, FavoriteUpdate, LibraryStats, MediaItemRead, to_read_model
from app.services import library_service, media_item_service

router = APIRouter()


@router.get("/me", response_model=list[MediaItemRead])
async def list_my_items(
    media_type: str | None = Query(None, alias="mediaType"),
    status_filter: str | None = Query(None, alias="status"),
    favorite: str | None = None,
    sort_by: str | None = Query(None, alias="sortBy"),
    owner_id: str = Depends(get_current_uid),
    session: AsyncSession = Depends(get_db),
):
    """List the caller's media items, newest consumption first by default."""
    items = await media_item_service.list_items(
        session,
        owner_id,
        media_type=media_type,
        status=status_filter,
        favorite=favorite,
        sort_by=sort_by,
    )
    return [to_read_model(item) for item in items]


@router.get("/me/stats", response_model=LibraryStats)
async def read_my_stats(
    media_type: str | None = Query(None, alias="mediaType"),
    owner_id: str = Depends(get_current_uid),
    session: AsyncSession = Depends(get_db),
) -> LibraryStats:
    """Return library counts for the caller."""
    return await library_service.get_library_stats(session, owner_id, media_type=media_type)


@router.post("", response_model=MediaItemRead, status_code=status.HTTP_201_CREATED)
async def create_item(
    payload: dict[str, Any] = Body(...),
    owner_id: str = Depends(get_current_uid),
    session: AsyncSession = Depends(get_db),
):
    """Log a new media item for the caller."""
    item = await media_item_service.create_item(session, owner_id, payload)
    return to_read_model(item)


@router.get("/{item_id}", response_model=MediaItemRead)
async def read_item(
    item_id: str,
    owner_id: str = Depends(get_current_uid),
    session: AsyncSession = Depends(get_db),
):
    item = await media_item_service.get_owned_item(session, owner_id, item_id)
    return to_read_model(item)


@router.put("/{item_id}", response_model=MediaItemRead)
async def update_item(
    item_id: str,
    payload: dict[str, Any] = Body(...),
    owner_id: str = Depends(get_current_uid),
    session: AsyncSession = Depends(get_db),
):
    """Update an owned item; `mediaType` changes are ignored."""
    item = await media_item_service.update_item(session, owner_id, item_id, payload)
    return to_read_model(item)


@router.put(
    "/{item_id}/favorite",
    response_model=MediaItemRead,
    openapi_extra={"requestBody": {"content": {"application/json": {"schema": FavoriteUpdate.model_json_schema()}}}},
)
async def set_favorite(
    item_id: str,
    payload: dict[str, Any] = Body(...),
    owner_id: str = Depends(get_current_uid),
    session: AsyncSession = Depends(get_db),
):
    """Set the favorite flag on an owned item."""
    item = await media_item_service.set_favorite(session, owner_id, item_id, payload.get("favorite"))
    return to_read_model(item)


@router.delete("/{item_id}", response_model=DeleteResponse)
async def delete_item(
    item_id: str,
    owner_id: str = Depends(get_current_uid),
    session: AsyncSession = Depends(get_db),
) -> DeleteResponse:
    await media_item_service.delete_item(session, owner_id, item_id)
    return DeleteResponse(message="Media item deleted successfully")
