from agency_cms.extensions import db
from .base import BaseModel

CONTENT_FIELDS = (
    "hero_title",
    "hero_subtitle",
    "hero_description",
    "cta_title",
    "cta_subtitle",
)

class HomeContent(BaseModel):
    """Singleton row holding the hero and call-to-action copy."""
    __tablename__ = "home_content"

    hero_title = db.Column(db.String(255), nullable=False, default="")
    hero_subtitle = db.Column(db.Text, nullable=False, default="")
    hero_description = db.Column(db.Text, nullable=False, default="")
    cta_title = db.Column(db.String(255), nullable=False, default="")
    cta_subtitle = db.Column(db.Text, nullable=False, default="")
