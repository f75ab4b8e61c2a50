from agency_cms.extensions import db
from .base import BaseModel
from .ordered_mixin import DisplayOrderMixin

class HomeServicePreview(BaseModel, DisplayOrderMixin):
    __tablename__ = "home_services_preview"

    title = db.Column(db.String(255), nullable=False, default="")
    description = db.Column(db.Text, nullable=True)
    image_url = db.Column(db.String(512), nullable=True)
