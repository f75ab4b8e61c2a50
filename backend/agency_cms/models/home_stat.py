from agency_cms.extensions import db
from .base import BaseModel
from .ordered_mixin import DisplayOrderMixin

class HomeStat(BaseModel, DisplayOrderMixin):
    __tablename__ = "home_stats"

    number = db.Column(db.String(50), nullable=False, default="")  # display string, e.g. "10+"
    label = db.Column(db.String(255), nullable=False, default="")
    icon = db.Column(db.String(50), nullable=True)
