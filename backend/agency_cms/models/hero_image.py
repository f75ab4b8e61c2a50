from agency_cms.extensions import db
from .base import BaseModel
from .ordered_mixin import DisplayOrderMixin

class HeroImage(BaseModel, DisplayOrderMixin):
    __tablename__ = "hero_images"

    image_url = db.Column(db.String(512), nullable=False, default="")
