# agency_cms/store.py
"""
Thin read/write wrapper around the four home-page collections.

Reads are open to everyone. Every write takes the caller's session
explicitly and refuses to run without an authenticated one. Writes only
flush; committing is left to the calling service (see
``agency_cms.utils.transaction.transactional``).
"""
from typing import Any, Dict, Iterable, List, Optional

from sqlalchemy.exc import SQLAlchemyError

from agency_cms.domain.errors import DeleteError, NotFound, ReadError, WriteError
from agency_cms.domain.session import AuthSession, require_session
from agency_cms.extensions import db
from agency_cms.models.hero_image import HeroImage
from agency_cms.models.home_content import CONTENT_FIELDS, HomeContent
from agency_cms.models.home_service_preview import HomeServicePreview
from agency_cms.models.home_stat import HomeStat

# View-model key -> model
COLLECTIONS = {
    "hero_images": HeroImage,
    "stats": HomeStat,
    "services_preview": HomeServicePreview,
}

COLLECTION_FIELDS = {
    "hero_images": ("image_url", "display_order"),
    "stats": ("number", "label", "icon", "display_order"),
    "services_preview": ("title", "description", "image_url", "display_order"),
}


def model_for(collection: str):
    try:
        return COLLECTIONS[collection]
    except KeyError:
        raise ValueError(f"Unknown collection: {collection}") from None


def _pick(collection: str, values: Dict[str, Any]) -> Dict[str, Any]:
    return {
        field: values[field]
        for field in COLLECTION_FIELDS[collection]
        if field in values
    }


# ------------------------
# Page content (singleton)
# ------------------------

def get_content() -> HomeContent:
    try:
        content = HomeContent.query.order_by(HomeContent.created_at.asc()).first()
    except SQLAlchemyError as exc:
        raise ReadError(f"Failed to read home content: {exc}") from exc

    if content is None:
        raise NotFound("No home content row exists")

    return content


def insert_content(values: Dict[str, Any], *, session: AuthSession) -> HomeContent:
    require_session(session, "saving home page content")

    content = HomeContent()
    for field in CONTENT_FIELDS:
        setattr(content, field, values.get(field) or "")

    try:
        db.session.add(content)
        db.session.flush()  # ensures content.id exists
    except SQLAlchemyError as exc:
        raise WriteError(f"Failed to insert home content: {exc}") from exc

    return content


def update_content(content_id: str, values: Dict[str, Any], *, session: AuthSession) -> HomeContent:
    require_session(session, "saving home page content")

    try:
        content = db.session.get(HomeContent, content_id)
        if content is None:
            raise WriteError(f"Home content {content_id} does not exist")

        for field in CONTENT_FIELDS:
            if field in values:
                setattr(content, field, values[field] or "")

        db.session.flush()
    except SQLAlchemyError as exc:
        raise WriteError(f"Failed to update home content: {exc}") from exc

    return content


# ------------------------
# Ordered collections
# ------------------------

def select_ordered(collection: str) -> List[Any]:
    model = model_for(collection)
    try:
        return model.query.order_by(model.display_order.asc(), model.created_at.asc()).all()
    except SQLAlchemyError as exc:
        raise ReadError(f"Failed to read {model.__tablename__}: {exc}") from exc


def insert_rows(collection: str, rows: Iterable[Dict[str, Any]], *, session: AuthSession) -> List[Any]:
    require_session(session, f"inserting {collection}")
    model = model_for(collection)

    inserted = []
    try:
        for values in rows:
            row = model(**_pick(collection, values))
            db.session.add(row)
            inserted.append(row)
        db.session.flush()
    except SQLAlchemyError as exc:
        raise WriteError(f"Failed to insert into {model.__tablename__}: {exc}") from exc

    return inserted


def update_row(collection: str, row_id: str, values: Dict[str, Any], *, session: AuthSession) -> Any:
    require_session(session, f"updating {collection}")
    model = model_for(collection)

    try:
        row = db.session.get(model, row_id)
        if row is None:
            raise WriteError(f"{model.__tablename__} row {row_id} does not exist")

        for field, value in _pick(collection, values).items():
            setattr(row, field, value)
        db.session.flush()
    except SQLAlchemyError as exc:
        raise WriteError(f"Failed to update {model.__tablename__}: {exc}") from exc

    return row


def delete_row(collection: str, row_id: Optional[str], *, session: AuthSession) -> None:
    require_session(session, f"deleting from {collection}")
    model = model_for(collection)

    try:
        deleted = model.query.filter_by(id=row_id).delete(synchronize_session=False)
        db.session.flush()
    except SQLAlchemyError as exc:
        raise DeleteError(f"Failed to delete from {model.__tablename__}: {exc}") from exc

    if not deleted:
        raise DeleteError(f"{model.__tablename__} row {row_id} does not exist")


def delete_all(collection: str, *, session: AuthSession) -> int:
    require_session(session, f"clearing {collection}")
    model = model_for(collection)

    try:
        deleted = model.query.delete(synchronize_session=False)
        db.session.flush()
    except SQLAlchemyError as exc:
        raise DeleteError(f"Failed to clear {model.__tablename__}: {exc}") from exc

    return deleted
