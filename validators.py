"""
Per-operation input checks for every resource.

All functions are pure: they take the decoded request body, return the
fields to hand to the repository and raise ``errors.ValidationError``
otherwise. None of them touches the store.

A field counts as absent when its key is missing or its value is
``None`` (JSON ``null``). Present values are checked for type and range,
so ``price: 0`` passes while ``title: ""`` fails.
"""

import re
from typing import Any, Dict, Iterable, Type

import pydantic
from pydantic import BaseModel

from errors import ValidationError
from schemas import OBJECT_ID_PATTERN, Order, OrderUpdate, Product, ProductUpdate, User, UserUpdate

_object_id_re = re.compile(OBJECT_ID_PATTERN)


def is_valid_object_id(value: Any) -> bool:
    """Syntactic identifier check; existence is never looked up."""
    return isinstance(value, str) and _object_id_re.match(value) is not None


def _describe(exc: pydantic.ValidationError) -> str:
    problems = []
    for err in exc.errors():
        field = ".".join(str(part) for part in err["loc"]) or "body"
        if err["type"] == "missing":
            problems.append(f"{field} is required")
        else:
            problems.append(f"{field}: {err['msg']}")
    return "; ".join(problems)


def _check(model: Type[BaseModel], payload: Dict[str, Any]) -> Dict[str, Any]:
    if not isinstance(payload, dict):
        raise ValidationError("Request body must be a JSON object")
    try:
        parsed = model.model_validate(payload)
    except pydantic.ValidationError as exc:
        raise ValidationError(_describe(exc)) from exc
    return parsed.model_dump(mode="json", exclude_none=True)


def _require_any(payload: Dict[str, Any], fields: Iterable[str]) -> None:
    fields = list(fields)
    if isinstance(payload, dict) and all(payload.get(f) is None for f in fields):
        raise ValidationError(f"At least one of {', '.join(fields[:-1])} or {fields[-1]} is required")


# Users

def validate_user_create(payload: Dict[str, Any]) -> Dict[str, Any]:
    return _check(User, payload)


def validate_user_update(payload: Dict[str, Any]) -> Dict[str, Any]:
    _require_any(payload, ("name", "email"))
    return _check(UserUpdate, payload)


# Products

def validate_product_create(payload: Dict[str, Any]) -> Dict[str, Any]:
    return _check(Product, payload)


def validate_product_replace(payload: Dict[str, Any]) -> Dict[str, Any]:
    """Full update: same required fields as create."""
    return _check(Product, payload)


def validate_product_update(payload: Dict[str, Any]) -> Dict[str, Any]:
    """Partial update: at least one field; omitted fields are left out."""
    _require_any(payload, ("title", "author", "price"))
    return _check(ProductUpdate, payload)


# Orders

def validate_order_create(payload: Dict[str, Any]) -> Dict[str, Any]:
    return _check(Order, payload)


def validate_order_replace(payload: Dict[str, Any]) -> Dict[str, Any]:
    return _check(Order, payload)


def validate_order_update(payload: Dict[str, Any]) -> Dict[str, Any]:
    """Partial update; an empty body is a valid no-op."""
    return _check(OrderUpdate, payload)
