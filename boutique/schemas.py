"""
Input schemas for the storage layer.

*Create models validate the fields a caller may supply when inserting a row;
generated columns (id, created_at, counters) are never accepted.

*Patch models describe partial updates: every field is optional and only
the fields that were explicitly set are written, so an absent field never
overwrites the stored value.
"""
from typing import ClassVar, List, Optional, Tuple, Union
from pydantic import BaseModel, ConfigDict, Field, model_validator

from boutique.models.status import OrderStatus


class _Schema(BaseModel):
    model_config = ConfigDict(extra='forbid')

    # Columns that may be left out of a patch but never set to null.
    not_null_fields: ClassVar[Tuple[str, ...]] = ()

    @model_validator(mode='after')
    def reject_explicit_nulls(self):
        for field in self.not_null_fields:
            if field in self.model_fields_set and getattr(self, field) is None:
                raise ValueError(f'{field} cannot be null')
        return self


class _PickedSchema(_Schema):
    """Create schema that keeps only its own fields and drops the rest of the payload."""
    model_config = ConfigDict(extra='ignore')


# ---------- Users ----------

class UserCreate(_PickedSchema):
    """Sign-up fields. Admin rights are granted afterwards through UserPatch."""
    username: str = Field(..., min_length=1, max_length=80)
    password: str = Field(..., min_length=1, description="Already-hashed credential")
    name: Optional[str] = None
    email: Optional[str] = None


class UserPatch(_Schema):
    not_null_fields = ('username', 'password', 'is_admin')

    username: Optional[str] = Field(None, min_length=1, max_length=80)
    password: Optional[str] = Field(None, min_length=1)
    name: Optional[str] = None
    email: Optional[str] = None
    is_admin: Optional[bool] = None


# ---------- Catalog ----------

class CategoryCreate(_Schema):
    name: str = Field(..., min_length=1, max_length=100)
    slug: Optional[str] = Field(None, description="Generated from name when omitted")
    description: Optional[str] = None


class CategoryPatch(_Schema):
    not_null_fields = ('name', 'slug')

    name: Optional[str] = Field(None, min_length=1, max_length=100)
    slug: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None


class ProductCreate(_Schema):
    name: str = Field(..., min_length=1, max_length=150)
    slug: Optional[str] = Field(None, description="Generated from name when omitted")
    description: Optional[str] = None
    price: float = Field(..., ge=0)
    category_id: Optional[int] = None
    image_urls: List[str] = Field(default_factory=list)
    features: List[str] = Field(default_factory=list)
    fabric: Optional[str] = None
    work_details: Optional[str] = None
    in_stock: bool = True
    featured: bool = False


class ProductPatch(_Schema):
    not_null_fields = ('name', 'slug', 'price', 'image_urls', 'features', 'in_stock', 'featured')

    name: Optional[str] = Field(None, min_length=1, max_length=150)
    slug: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    price: Optional[float] = Field(None, ge=0)
    category_id: Optional[int] = None
    image_urls: Optional[List[str]] = None
    features: Optional[List[str]] = None
    fabric: Optional[str] = None
    work_details: Optional[str] = None
    in_stock: Optional[bool] = None
    featured: Optional[bool] = None


class ProductFilters(_Schema):
    """Conjunctive product listing filters. Unset fields do not filter."""
    category_id: Optional[int] = None
    category_slug: Optional[str] = None
    featured: Optional[bool] = None
    min_price: Optional[float] = None
    max_price: Optional[float] = None
    search: Optional[str] = None
    fabric: Optional[str] = None
    work_details: Optional[str] = None


# ---------- Cart ----------

class CartItemCreate(_PickedSchema):
    product_id: int
    quantity: int = Field(1, ge=1)


class CartItemPatch(_Schema):
    not_null_fields = ('quantity',)

    quantity: Optional[int] = Field(None, ge=1)


# ---------- Orders ----------

class OrderCreate(_Schema):
    status: Union[OrderStatus, str] = OrderStatus.PENDING
    total_amount: float = Field(..., ge=0)
    shipping_address: Optional[str] = None
    payment_method: Optional[str] = None


class OrderItemCreate(_Schema):
    product_id: int
    quantity: int = Field(..., ge=1)
    price: float = Field(..., ge=0, description="Unit price at purchase time")


class CustomOrderRequestCreate(_PickedSchema):
    """Status is not accepted here; new requests always start as 'new'."""
    name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., min_length=1, max_length=120)
    phone: Optional[str] = None
    requirements: str = Field(..., min_length=1)
    budget: Optional[float] = Field(None, ge=0)


# ---------- Reviews ----------

class ReviewCreate(_Schema):
    product_id: int
    user_id: int
    rating: int = Field(..., ge=1, le=5)
    comment: str
