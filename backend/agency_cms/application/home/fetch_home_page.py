from typing import Any, Dict
from flask import current_app
from sqlalchemy.exc import SQLAlchemyError
from agency_cms import store
from agency_cms.domain.errors import HomeContentError, NotFound
from agency_cms.domain.session import ANONYMOUS, AuthSession
from agency_cms.normalizers.home import empty_home_page, normalize_home_page
from agency_cms.utils.transaction import transactional


def fetch_home_page(*, session: AuthSession = ANONYMOUS) -> Dict[str, Any]:
    """
    Load the home-page aggregate as one view model.

    Responsibilities:
    - Read the content singleton, creating a default row on first load
      when the caller is authenticated
    - Read hero images, stats and service previews by display order
    - Degrade to an all-empty view model on any store failure
    """
    try:
        try:
            content = store.get_content()
        except NotFound:
            if session.is_authenticated:
                with transactional():
                    content = store.insert_content({}, session=session)
                current_app.logger.info(f"Created default home content {content.id}")
            else:
                # Placeholder only, nothing is persisted for anonymous readers
                content = None

        hero_images = store.select_ordered("hero_images")
        stats = store.select_ordered("stats")
        services_preview = store.select_ordered("services_preview")

    except (HomeContentError, SQLAlchemyError) as exc:
        current_app.logger.error(f"Error fetching full home page data: {exc}")
        return empty_home_page()

    return normalize_home_page(content, hero_images, stats, services_preview)
