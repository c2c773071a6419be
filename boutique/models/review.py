"""Review model."""

from datetime import datetime
from boutique.extensions import db


class Review(db.Model):
    """Product review. Removed together with its product or its author."""
    __tablename__ = 'reviews'
    
    id = db.Column(db.Integer, primary_key=True)
    product_id = db.Column(db.Integer, db.ForeignKey('products.id', ondelete='CASCADE'),
                           nullable=False, index=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id', ondelete='CASCADE'),
                        nullable=False)
    rating = db.Column(db.Integer, nullable=False)  # 1-5
    comment = db.Column(db.Text, nullable=False)
    helpful_count = db.Column(db.Integer, default=0, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    
    @property
    def username(self):
        """Username of the reviewer."""
        return self.user.username if self.user is not None else None
    
    def __repr__(self):
        return f'<Review {self.rating} stars>'
