"""Storage error types.

Missing rows are reported as ``None`` by the storage layer, never as an
exception. Constraint violations come straight from SQLAlchemy
(``sqlalchemy.exc.IntegrityError``) and are not wrapped.
"""


class StorageError(Exception):
    """Base class for errors raised by the storage layer itself."""


class DanglingReferenceError(StorageError):
    """A cart or order item points at a product row that does not exist."""

    def __init__(self, table, item_id, product_id):
        self.table = table
        self.item_id = item_id
        self.product_id = product_id
        super().__init__(
            f'{table} row {item_id} references missing product {product_id}'
        )


class EmptyOrderError(StorageError, ValueError):
    """An order was submitted without any items."""
