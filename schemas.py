"""
Request schemas for the resource services

Each resource has a create model (every field required) and an update
model (every field optional). Stored documents use the same field names
plus ``created_at``/``updated_at``:
- User -> "users"
- Product -> "products"
- Order -> "orders"
"""

from typing import Annotated, Any, Optional

from pydantic import BaseModel, EmailStr, Field, StrictInt, StringConstraints, field_validator

OBJECT_ID_PATTERN = r"^[0-9a-fA-F]{24}$"
# largest integer BSON can store (int64)
MAX_QUANTITY = 2**63 - 1

NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
ObjectIdStr = Annotated[str, StringConstraints(pattern=OBJECT_ID_PATTERN)]


def _require_number(value: Any) -> Any:
    # bool is an int subclass; JSON true/false is not a price
    if value is not None and (isinstance(value, bool) or not isinstance(value, (int, float))):
        raise ValueError("must be a number")
    return value


class User(BaseModel):
    name: NonEmptyStr = Field(..., description="Full name")
    email: EmailStr = Field(..., description="Email address, unique across users")


class UserUpdate(BaseModel):
    name: Optional[NonEmptyStr] = None
    email: Optional[EmailStr] = None


class Product(BaseModel):
    title: NonEmptyStr = Field(..., description="Product title")
    author: NonEmptyStr = Field(..., description="Product author")
    price: float = Field(..., ge=0, allow_inf_nan=False, description="Price, zero allowed")

    @field_validator("price", mode="before")
    @classmethod
    def price_is_number(cls, value: Any) -> Any:
        return _require_number(value)


class ProductUpdate(BaseModel):
    title: Optional[NonEmptyStr] = None
    author: Optional[NonEmptyStr] = None
    price: Optional[float] = Field(None, ge=0, allow_inf_nan=False)

    @field_validator("price", mode="before")
    @classmethod
    def price_is_number(cls, value: Any) -> Any:
        return _require_number(value)


class Order(BaseModel):
    userId: ObjectIdStr = Field(..., description="ID of the ordering user (not checked for existence)")
    productId: ObjectIdStr = Field(..., description="ID of the ordered product (not checked for existence)")
    quantity: StrictInt = Field(..., ge=1, le=MAX_QUANTITY, description="Units ordered")


class OrderUpdate(BaseModel):
    userId: Optional[ObjectIdStr] = None
    productId: Optional[ObjectIdStr] = None
    quantity: Optional[StrictInt] = Field(None, ge=1, le=MAX_QUANTITY)
