from agency_cms.extensions import db
from .base import BaseModel

class ContactMessage(BaseModel):
    __tablename__ = "messages"

    name = db.Column(db.String(200), nullable=False)
    email = db.Column(db.String(200), nullable=False)
    subject = db.Column(db.String(255), nullable=False, default="")
    message = db.Column(db.Text, nullable=False)
    read = db.Column(db.Boolean, nullable=False, default=False)
