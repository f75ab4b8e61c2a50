from contextlib import contextmanager
from flask import current_app
from agency_cms.extensions import db

@contextmanager
def transactional():
    """
    Commit everything flushed inside the block, or roll all of it back.

    Store writes only flush, so a save that touches several collections
    either lands as a whole or not at all.
    """
    try:
        yield
        db.session.commit()
    except Exception as exc:
        db.session.rollback()
        current_app.logger.warning(f"Transaction rolled back: {exc}")
        raise
