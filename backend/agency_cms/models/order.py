from agency_cms.extensions import db
from .base import BaseModel

ORDER_STATUSES = ("pending", "confirmed", "in-progress", "completed", "cancelled")

class Order(BaseModel):
    __tablename__ = "orders"

    order_id = db.Column(db.String(32), unique=True, nullable=False, index=True)
    name = db.Column(db.String(200), nullable=False)
    email = db.Column(db.String(200), nullable=False)
    phone = db.Column(db.String(50), nullable=True)
    company = db.Column(db.String(200), nullable=True)
    message = db.Column(db.Text, nullable=True)
    budget = db.Column(db.String(100), nullable=True)
    timeline = db.Column(db.String(100), nullable=True)
    package_name = db.Column(db.String(200), nullable=False)
    package_price = db.Column(db.String(100), nullable=False)
    status = db.Column(db.String(20), nullable=False, default="pending", index=True)
