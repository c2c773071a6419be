"""Custom order request model."""

from datetime import datetime
from boutique.extensions import db
from .status import RequestStatus


class CustomOrderRequest(db.Model):
    """Made-to-order request. user_id is null for anonymous submissions."""
    __tablename__ = 'custom_order_requests'
    
    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'))
    name = db.Column(db.String(100), nullable=False)
    email = db.Column(db.String(120), nullable=False)
    phone = db.Column(db.String(20))
    requirements = db.Column(db.Text, nullable=False)
    budget = db.Column(db.Float)
    status = db.Column(db.String(50), default=RequestStatus.NEW.value)  # new, then caller-defined
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    
    def __repr__(self):
        return f'<CustomOrderRequest {self.id} from {self.email}>'
