"""Owner-scoped CRUD for logged media items.

Invariants:
- `owner_id` is set from the authenticated caller at creation and never rewritten.
- `media_type` is fixed at creation; update payloads never carry it.
- Existence and ownership are checked before any field is applied.
"""

from __future__ import annotations

import logging
import uuid
from typing import Any

from pydantic import ValidationError
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.core.errors import Forbidden, InvalidFieldValue, InvalidMediaType, MissingRequiredField, NotFound
from app.models.media import DETAILS_MODELS, MediaItem, MediaType, details_attribute
from app.schema.media import CREATE_MODELS, ENVELOPE_FIELDS, UPDATE_MODELS, category_field_names
from app.services.media_fields import extract_allowed_fields, parse_media_type, parse_status
from app.services.media_query import DEFAULT_SORT, build_order_by, parse_sort_expression

logger = logging.getLogger("app.services.media")

_DETAIL_LOADERS = (
    selectinload(MediaItem.book),
    selectinload(MediaItem.game),
    selectinload(MediaItem.screen),
    selectinload(MediaItem.music_album),
)


def _coerce_id(item_id: str | uuid.UUID) -> uuid.UUID | None:
    try:
        return uuid.UUID(str(item_id))
    except ValueError:
        return None


def _validation_errors(exc: ValidationError) -> dict[str, str]:
    """Flatten pydantic errors into a `{field: message}` map."""
    errors: dict[str, str] = {}
    for error in exc.errors():
        loc = error.get("loc") or ("body",)
        field = str(loc[0])
        errors.setdefault(field, error.get("msg", "Invalid value"))
    return errors


async def _load(session: AsyncSession, item_id: uuid.UUID) -> MediaItem | None:
    result = await session.execute(
        select(MediaItem)
        .options(*_DETAIL_LOADERS)
        .where(MediaItem.id == item_id)
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


async def _commit(session: AsyncSession) -> None:
    """Commit, mapping constraint violations onto a validation failure."""
    try:
        await session.commit()
    except IntegrityError as exc:
        await session.rollback()
        logger.info("Media item rejected by store constraint: %s", exc.orig)
        raise InvalidFieldValue("Validation Error") from exc


async def get_owned_item(session: AsyncSession, owner_id: str, item_id: str | uuid.UUID) -> MediaItem:
    """Fetch an item, raising NotFound if absent and Forbidden if another owner holds it."""
    item_uuid = _coerce_id(item_id)
    item = await _load(session, item_uuid) if item_uuid else None
    if item is None:
        raise NotFound()
    if item.owner_id != owner_id:
        logger.info("Owner %s denied access to media item %s", owner_id, item.id)
        raise Forbidden()
    return item


async def list_items(
    session: AsyncSession,
    owner_id: str,
    *,
    media_type: str | None = None,
    status: str | None = None,
    favorite: str | None = None,
    sort_by: str | None = None,
) -> list[MediaItem]:
    """List the owner's items with optional filters and a sort expression."""
    query = select(MediaItem).options(*_DETAIL_LOADERS).where(MediaItem.owner_id == owner_id)

    parsed_type = parse_media_type(media_type)
    if parsed_type:
        query = query.where(MediaItem.media_type == parsed_type)
    parsed_status = parse_status(status)
    if parsed_status:
        query = query.where(MediaItem.status == parsed_status)
    if favorite:
        query = query.where(MediaItem.favorite.is_(favorite == "true"))

    sort_keys = parse_sort_expression(sort_by) if sort_by else DEFAULT_SORT
    query = query.order_by(*build_order_by(sort_keys))
    result = await session.execute(query)
    return list(result.scalars().all())


async def create_item(session: AsyncSession, owner_id: str, body: Any) -> MediaItem:
    """Validate an allow-listed body and persist it as a new item owned by the caller."""
    fields = extract_allowed_fields(body)

    if "mediaType" in body and "mediaType" not in fields:
        raise InvalidMediaType(f"Invalid mediaType: {body['mediaType']}")
    missing = [name for name in ("title", "mediaType") if fields.get(name) in (None, "")]
    if missing:
        raise MissingRequiredField(errors={name: "Field is required" for name in missing})

    media_type = MediaType(fields["mediaType"])
    try:
        payload = CREATE_MODELS[media_type].model_validate(fields)
    except ValidationError as exc:
        raise InvalidFieldValue(errors=_validation_errors(exc)) from exc

    item = MediaItem(
        owner_id=owner_id,
        media_type=media_type,
        **{name: getattr(payload, name) for name in ENVELOPE_FIELDS},
    )
    details_model = DETAILS_MODELS[media_type]
    details = details_model(**{name: getattr(payload, name) for name in category_field_names(media_type)})
    setattr(item, details_attribute(media_type), details)

    session.add(item)
    await _commit(session)
    logger.info("Created %s media item %s for owner %s", media_type.value, item.id, owner_id)
    return await _load(session, item.id)


async def update_item(session: AsyncSession, owner_id: str, item_id: str | uuid.UUID, body: Any) -> MediaItem:
    """Merge allow-listed fields into an owned item; lists are replaced wholesale."""
    item = await get_owned_item(session, owner_id, item_id)

    fields = extract_allowed_fields(body)
    if fields.pop("mediaType", None) is not None:
        logger.debug("Ignoring mediaType change on media item %s", item.id)

    media_type = MediaType(item.media_type)
    try:
        payload = UPDATE_MODELS[media_type].model_validate(fields)
    except ValidationError as exc:
        raise InvalidFieldValue(errors=_validation_errors(exc)) from exc

    updates = payload.model_dump(exclude_unset=True)
    detail_names = set(category_field_names(media_type))
    details = item.details
    if details is None and detail_names.intersection(updates):
        details = DETAILS_MODELS[media_type]()
        setattr(item, details_attribute(media_type), details)
    for name, value in updates.items():
        target = details if name in detail_names else item
        setattr(target, name, value)

    await _commit(session)
    return await _load(session, item.id)


async def set_favorite(session: AsyncSession, owner_id: str, item_id: str | uuid.UUID, favorite: Any) -> MediaItem:
    """Set only the favorite flag on an owned item."""
    if not isinstance(favorite, bool):
        raise InvalidFieldValue(
            "Missing or invalid 'favorite' value (must be boolean).",
            errors={"favorite": "Must be a boolean"},
        )
    item = await get_owned_item(session, owner_id, item_id)
    item.favorite = favorite
    await _commit(session)
    return await _load(session, item.id)


async def delete_item(session: AsyncSession, owner_id: str, item_id: str | uuid.UUID) -> None:
    """Permanently remove an owned item and its extension row."""
    item = await get_owned_item(session, owner_id, item_id)
    await session.delete(item)
    await session.commit()
    logger.info("Deleted media item %s for owner %s", item.id, owner_id)
