from agency_cms.extensions import db

class DisplayOrderMixin:
    # 1-based list position, recomputed by the client on every save
    display_order = db.Column(db.Integer, nullable=False, default=0, index=True)
