"""
Storage service: every read and write of storefront data goes through
DatabaseStorage.

Lookups return the model instance or None. Creates return the persisted row
with its generated id and timestamps. Updates take a patch (schema instance or
mapping) and only write the fields the caller supplied. Store-level failures
(unique and foreign key violations included) roll back the session and are
re-raised unchanged.
"""
import logging
from contextlib import contextmanager

from pydantic import BaseModel
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import contains_eager, joinedload, selectinload

from boutique.errors import DanglingReferenceError, EmptyOrderError
from boutique.models import (CartItem, Category, CustomOrderRequest, Order,
                             OrderItem, Product, Review, User)
from boutique.models.status import RequestStatus, status_value
from boutique.schemas import (CartItemCreate, CartItemPatch, CategoryCreate,
                              CategoryPatch, CustomOrderRequestCreate,
                              OrderCreate, OrderItemCreate, ProductCreate,
                              ProductFilters, ProductPatch, ReviewCreate,
                              UserCreate, UserPatch)
from boutique.utils.slugs import generate_unique_slug

logger = logging.getLogger(__name__)


def _validated(schema, data):
    """Coerce a mapping into *schema*; schema instances pass through."""
    if isinstance(data, schema):
        return data
    if isinstance(data, BaseModel):
        data = data.model_dump(exclude_unset=True)
    return schema.model_validate(data)


def _patch_values(schema, patch):
    """Fields explicitly present in the patch, and nothing else."""
    return _validated(schema, patch).model_dump(exclude_unset=True)


class DatabaseStorage:
    """Storage service bound to one SQLAlchemy session.

    Build it explicitly (``DatabaseStorage(db.session)``) and hand it to the
    code that needs it; create_app registers one under
    ``app.extensions['storage']``.
    """

    def __init__(self, session):
        self.session = session

    @contextmanager
    def _commit(self, action):
        """Commit on success; roll back, log and re-raise on store errors."""
        try:
            yield
            self.session.commit()
        except SQLAlchemyError:
            self.session.rollback()
            logger.warning('Storage operation failed: %s', action, exc_info=True)
            raise

    def _insert(self, instance, action):
        with self._commit(action):
            self.session.add(instance)
        logger.debug('Created %r', instance)
        return instance

    def _apply_patch(self, model, row_id, values, action):
        instance = self.session.get(model, row_id)
        if instance is None:
            return None
        if not values:
            return instance
        with self._commit(action):
            for key, value in values.items():
                setattr(instance, key, value)
        logger.debug('Updated %r: %s', instance, sorted(values))
        return instance

    def _delete_where(self, model, action, *criteria):
        with self._commit(action):
            deleted = self.session.query(model).filter(*criteria).delete(
                synchronize_session=False
            )
        return deleted

    def _get_one(self, model, **criteria):
        return self.session.query(model).filter_by(**criteria).first()

    # ==================== USERS ====================

    def get_user(self, user_id):
        return self.session.get(User, user_id)

    def get_user_by_username(self, username):
        return self._get_one(User, username=username)

    def create_user(self, data):
        """Insert a user. A taken username raises IntegrityError from the store."""
        values = _validated(UserCreate, data).model_dump()
        return self._insert(User(**values), f'create user {values["username"]!r}')

    def update_user(self, user_id, patch):
        values = _patch_values(UserPatch, patch)
        return self._apply_patch(User, user_id, values, f'update user {user_id}')

    # ==================== CATEGORIES ====================

    def get_categories(self):
        return self.session.query(Category).order_by(Category.id).all()

    def get_category(self, category_id):
        return self.session.get(Category, category_id)

    def get_category_by_slug(self, slug):
        return self._get_one(Category, slug=slug)

    def create_category(self, data):
        values = _validated(CategoryCreate, data).model_dump()
        if not values['slug']:
            values['slug'] = generate_unique_slug(self.session, Category, values['name'],
                                                  fallback='category')
        return self._insert(Category(**values), f'create category {values["slug"]!r}')

    def update_category(self, category_id, patch):
        values = _patch_values(CategoryPatch, patch)
        return self._apply_patch(Category, category_id, values,
                                 f'update category {category_id}')

    def delete_category(self, category_id):
        """Delete a category. Products still pointing at it make the store reject this."""
        deleted = self._delete_where(Category, f'delete category {category_id}',
                                     Category.id == category_id)
        return deleted > 0

    # ==================== PRODUCTS ====================

    def get_products(self, filters=None):
        """List products matching every supplied filter.

        An unknown category_slug is ignored rather than matching nothing.
        Text filters are literal substring matches; case sensitivity follows
        the database collation.
        """
        query = self.session.query(Product)

        if filters is not None:
            filters = _validated(ProductFilters, filters)

            if filters.category_id is not None:
                query = query.filter(Product.category_id == filters.category_id)

            if filters.category_slug:
                category = self.get_category_by_slug(filters.category_slug)
                if category is not None:
                    query = query.filter(Product.category_id == category.id)
                else:
                    logger.debug('Ignoring unknown category slug %r', filters.category_slug)

            if filters.featured is not None:
                query = query.filter(Product.featured == filters.featured)

            if filters.min_price is not None:
                query = query.filter(Product.price >= filters.min_price)

            if filters.max_price is not None:
                query = query.filter(Product.price <= filters.max_price)

            if filters.search:
                query = query.filter(Product.name.contains(filters.search, autoescape=True))

            if filters.fabric:
                query = query.filter(Product.fabric.contains(filters.fabric, autoescape=True))

            if filters.work_details:
                query = query.filter(
                    Product.work_details.contains(filters.work_details, autoescape=True)
                )

        return query.order_by(Product.id).all()

    def get_product(self, product_id):
        return self.session.get(Product, product_id)

    def get_product_by_slug(self, slug):
        return self._get_one(Product, slug=slug)

    def create_product(self, data):
        values = _validated(ProductCreate, data).model_dump()
        if not values['slug']:
            values['slug'] = generate_unique_slug(self.session, Product, values['name'],
                                                  fallback='product')
        return self._insert(Product(**values), f'create product {values["slug"]!r}')

    def update_product(self, product_id, patch):
        values = _patch_values(ProductPatch, patch)
        return self._apply_patch(Product, product_id, values, f'update product {product_id}')

    def delete_product(self, product_id):
        """Delete a product; its reviews go with it (ON DELETE CASCADE)."""
        deleted = self._delete_where(Product, f'delete product {product_id}',
                                     Product.id == product_id)
        return deleted > 0

    # ==================== CART ====================

    def get_cart_items(self, user_id):
        """Cart rows for a user, each with its product loaded in the same query."""
        items = (self.session.query(CartItem)
                 .options(joinedload(CartItem.product))
                 .filter(CartItem.user_id == user_id)
                 .order_by(CartItem.id)
                 .all())
        for item in items:
            if item.product is None:
                logger.error('Cart item %s references missing product %s',
                             item.id, item.product_id)
                raise DanglingReferenceError('cart_items', item.id, item.product_id)
        return items

    def get_cart_item(self, item_id):
        return self.session.get(CartItem, item_id)

    def _increment_cart_quantity(self, user_id, product_id, quantity):
        return (self.session.query(CartItem)
                .filter_by(user_id=user_id, product_id=product_id)
                .update({CartItem.quantity: CartItem.quantity + quantity},
                        synchronize_session=False))

    def create_cart_item(self, user_id, data):
        """Add a product to a user's cart.

        If the pair is already in the cart its quantity grows by the requested
        amount (one UPDATE, no read-modify-write); otherwise a row is inserted.
        """
        item = _validated(CartItemCreate, data)
        action = f'add product {item.product_id} to cart of user {user_id}'

        with self._commit(action):
            updated = self._increment_cart_quantity(user_id, item.product_id, item.quantity)
            if not updated:
                self.session.add(CartItem(user_id=user_id, product_id=item.product_id,
                                          quantity=item.quantity))
                try:
                    self.session.flush()
                except IntegrityError:
                    # Either a concurrent add of the same pair won the insert,
                    # or the product does not exist.
                    self.session.rollback()
                    if not self._increment_cart_quantity(user_id, item.product_id,
                                                         item.quantity):
                        raise

        return self._get_one(CartItem, user_id=user_id, product_id=item.product_id)

    def update_cart_item(self, item_id, patch):
        values = _patch_values(CartItemPatch, patch)
        return self._apply_patch(CartItem, item_id, values, f'update cart item {item_id}')

    def delete_cart_item(self, item_id):
        deleted = self._delete_where(CartItem, f'delete cart item {item_id}',
                                     CartItem.id == item_id)
        return deleted > 0

    def clear_cart(self, user_id):
        self._delete_where(CartItem, f'clear cart of user {user_id}',
                           CartItem.user_id == user_id)
        return True

    # ==================== ORDERS ====================

    def get_orders(self, user_id=None):
        query = self.session.query(Order)
        if user_id is not None:
            query = query.filter(Order.user_id == user_id)
        return query.order_by(Order.id).all()

    def get_order(self, order_id):
        """An order with its items, each item carrying its product."""
        order = (self.session.query(Order)
                 .options(selectinload(Order.items).joinedload(OrderItem.product))
                 .filter(Order.id == order_id)
                 .first())
        if order is None:
            return None
        for item in order.items:
            if item.product is None:
                logger.error('Order item %s of order %s references missing product %s',
                             item.id, order.id, item.product_id)
                raise DanglingReferenceError('order_items', item.id, item.product_id)
        return order

    def create_order(self, user_id, data, items):
        """Place an order.

        Inserts the order, its items (prices as submitted) and empties the
        user's cart in one transaction. Nothing is kept if any step fails.
        """
        order_data = _validated(OrderCreate, data).model_dump()
        order_data['status'] = status_value(order_data['status'])
        lines = [_validated(OrderItemCreate, item) for item in items]
        if not lines:
            raise EmptyOrderError('An order needs at least one item')

        with self._commit(f'place order for user {user_id}'):
            order = Order(user_id=user_id, **order_data)
            self.session.add(order)
            self.session.flush()

            self.session.add_all([
                OrderItem(order_id=order.id, product_id=line.product_id,
                          quantity=line.quantity, price=line.price)
                for line in lines
            ])
            self.session.flush()

            self.session.query(CartItem).filter(CartItem.user_id == user_id).delete(
                synchronize_session=False
            )

        logger.info('Order %s placed for user %s with %d item(s), total %.2f',
                    order.id, user_id, len(lines), order_data['total_amount'])
        return order

    def update_order_status(self, order_id, status):
        return self._apply_patch(Order, order_id, {'status': status_value(status)},
                                 f'update status of order {order_id}')

    # ==================== CUSTOM ORDER REQUESTS ====================

    def get_custom_order_requests(self):
        return self.session.query(CustomOrderRequest).order_by(CustomOrderRequest.id).all()

    def get_custom_order_request(self, request_id):
        return self.session.get(CustomOrderRequest, request_id)

    def create_custom_order_request(self, user_id, data):
        """Record a custom order request; user_id is None for anonymous visitors."""
        values = _validated(CustomOrderRequestCreate, data).model_dump()
        request = CustomOrderRequest(user_id=user_id or None,
                                     status=RequestStatus.NEW.value, **values)
        return self._insert(request, f'create custom order request from {values["email"]!r}')

    def update_custom_order_request_status(self, request_id, status):
        return self._apply_patch(CustomOrderRequest, request_id,
                                 {'status': status_value(status)},
                                 f'update status of custom order request {request_id}')

    # ==================== REVIEWS ====================

    def get_product_reviews(self, product_id):
        """Reviews of a product, newest first, with the reviewer loaded for .username."""
        return (self.session.query(Review)
                .join(Review.user)
                .options(contains_eager(Review.user))
                .filter(Review.product_id == product_id)
                .order_by(Review.created_at.desc(), Review.id.desc())
                .all())

    def get_review(self, review_id):
        return self.session.get(Review, review_id)

    def create_review(self, data):
        values = _validated(ReviewCreate, data).model_dump()
        return self._insert(Review(**values),
                            f'create review of product {values["product_id"]}')

    def increment_helpful_count(self, review_id):
        """Add one helpful vote with a single UPDATE so concurrent votes are never lost."""
        with self._commit(f'increment helpful count of review {review_id}'):
            updated = (self.session.query(Review)
                       .filter(Review.id == review_id)
                       .update({Review.helpful_count: Review.helpful_count + 1},
                               synchronize_session=False))
        if not updated:
            return None
        return self.session.get(Review, review_id)
