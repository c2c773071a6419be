"""Cart model."""

from datetime import datetime
from boutique.extensions import db


class CartItem(db.Model):
    """Shopping cart item model. One row per (user, product) pair."""
    __tablename__ = 'cart_items'
    __table_args__ = (
        db.UniqueConstraint('user_id', 'product_id', name='uq_cart_items_user_product'),
        db.CheckConstraint('quantity > 0', name='ck_cart_items_quantity_positive'),
    )
    
    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)
    product_id = db.Column(db.Integer, db.ForeignKey('products.id'), nullable=False)
    quantity = db.Column(db.Integer, default=1, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    
    @property
    def subtotal(self):
        """Calculate subtotal for this cart item at the product's current price."""
        return self.product.price * self.quantity
    
    def __repr__(self):
        return f'<CartItem {self.product_id} x {self.quantity}>'
