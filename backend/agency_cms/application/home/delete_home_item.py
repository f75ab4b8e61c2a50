from flask import current_app
from agency_cms import store
from agency_cms.domain.edit_state import (
    HomeEditState,
    remove_hero_image,
    remove_service_preview,
    remove_stat,
)
from agency_cms.domain.session import AuthSession, require_session
from agency_cms.utils.transaction import transactional

_REMOVERS = {
    "hero_images": remove_hero_image,
    "stats": remove_stat,
    "services_preview": remove_service_preview,
}


def delete_home_item(
    *,
    collection: str,
    item_id: str,
    session: AuthSession,
) -> None:
    """
    Delete one hero image, stat or service preview right away.

    Runs in its own transaction, independent of any pending save.
    """
    require_session(session, "deletion")

    with transactional():
        store.delete_row(collection, item_id, session=session)

    current_app.logger.info(f"Deleted {collection} item {item_id}")


def discard_item(
    state: HomeEditState,
    *,
    collection: str,
    key: str,
    session: AuthSession,
) -> HomeEditState:
    """
    Remove an item from the edit state, deleting it from the store first
    when it has been persisted.

    Drafts never reach the store. If the delete fails the error propagates
    and the caller keeps its unchanged state.
    """
    if collection not in _REMOVERS:
        raise ValueError(f"Unknown collection: {collection}")

    item = next((i for i in getattr(state, collection) if i.key == key), None)
    if item is None:
        raise KeyError(key)

    if not item.is_draft:
        delete_home_item(collection=collection, item_id=item.id, session=session)

    return _REMOVERS[collection](state, key)
