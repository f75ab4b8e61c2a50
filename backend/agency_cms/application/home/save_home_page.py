from typing import Any, Callable, Dict, List
from flask import current_app
from agency_cms import store
from agency_cms.application.home.fetch_home_page import fetch_home_page
from agency_cms.domain.edit_state import HomeEditState
from agency_cms.domain.errors import NotFound
from agency_cms.domain.invariants.home import (
    assert_display_order,
    assert_image_resolved,
    assert_stat_icon,
)
from agency_cms.domain.session import AuthSession, require_session
from agency_cms.models.home_content import CONTENT_FIELDS
from agency_cms.utils.media import upload_image
from agency_cms.utils.transaction import transactional


def save_home_page(
    *,
    state: HomeEditState,
    session: AuthSession,
    upload: Callable[..., str] = upload_image,
) -> Dict[str, Any]:
    """
    Persist the whole edit state and return the stored view model.

    Steps, each aborting the rest on failure:
    1. Upload pending files, one at a time (hero images, then services)
    2. Update or insert the content singleton
    3. Sync hero images, stats and service previews

    Steps 2 and 3 share one transaction. Uploads from step 1 are not
    removed when a later step fails.
    """
    require_session(session, "saving home page data")

    for stat in state.stats:
        assert_stat_icon(stat.icon)

    hero_urls = _resolve_images(state.hero_images, session, upload)
    service_urls = _resolve_images(state.services_preview, session, upload)

    hero_rows = [
        {
            "id": item.id,
            "image_url": hero_urls[item.key],
            "display_order": index,
        }
        for index, item in enumerate(state.hero_images, start=1)
    ]
    stat_rows = [
        {
            "id": item.id,
            "number": item.number,
            "label": item.label,
            "icon": item.icon or None,
            "display_order": index,
        }
        for index, item in enumerate(state.stats, start=1)
    ]
    service_rows = [
        {
            "id": item.id,
            "title": item.title,
            "description": item.description,
            "image_url": service_urls[item.key],
            "display_order": index,
        }
        for index, item in enumerate(state.services_preview, start=1)
    ]

    content_values = {
        field: state.content.get(field) or "" for field in CONTENT_FIELDS
    }

    with transactional():
        content_id = state.content.get("id")
        if not content_id:
            # Reuse the singleton when the client did not send its id
            try:
                content_id = store.get_content().id
            except NotFound:
                content_id = None

        if content_id:
            store.update_content(content_id, content_values, session=session)
        else:
            store.insert_content(content_values, session=session)

        _sync_collection("hero_images", hero_rows, session)
        _sync_collection("stats", stat_rows, session)
        _sync_collection("services_preview", service_rows, session)

    current_app.logger.info(
        f"Home page saved: {len(hero_rows)} hero images, "
        f"{len(stat_rows)} stats, {len(service_rows)} service previews"
    )

    return fetch_home_page(session=session)


def _resolve_images(items, session, upload) -> Dict[str, str]:
    urls = {}
    for item in items:
        image = item.image
        if image.is_pending:
            urls[item.key] = upload(image.value, session=session)
        else:
            urls[item.key] = image.url

        assert_image_resolved(urls[item.key])
    return urls


def _sync_collection(collection: str, rows: List[Dict[str, Any]], session: AuthSession) -> None:
    """
    Make the stored collection match ``rows``.

    Known ids are updated in place, everything else is inserted, and stored
    rows the client no longer lists are deleted.
    """
    assert_display_order(rows)

    if not rows:
        store.delete_all(collection, session=session)
        return

    existing = {row.id for row in store.select_ordered(collection)}
    kept = set()
    to_update = []
    to_insert = []

    for values in rows:
        row_id = values.get("id")
        if row_id in existing and row_id not in kept:
            kept.add(row_id)
            to_update.append(values)
        else:
            to_insert.append(values)

    for row_id in existing - kept:
        store.delete_row(collection, row_id, session=session)

    for values in to_update:
        store.update_row(collection, values["id"], values, session=session)

    store.insert_rows(collection, to_insert, session=session)
