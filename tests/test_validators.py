"""Tests for the pure input validators."""

import pytest

from errors import ValidationError
from validators import (
    is_valid_object_id,
    validate_order_create,
    validate_order_replace,
    validate_order_update,
    validate_product_create,
    validate_product_replace,
    validate_product_update,
    validate_user_create,
    validate_user_update,
)

USER_ID = "64b7f0c2a1b2c3d4e5f60701"
PRODUCT_ID = "64b7f0c2a1b2c3d4e5f60702"


class TestObjectIds:
    def test_accepts_24_hex_characters(self):
        assert is_valid_object_id(USER_ID)
        assert is_valid_object_id("ABCDEF0123456789abcdef01")

    @pytest.mark.parametrize("value", ["", "123", "z" * 24, USER_ID + "0", "abcdefghijkl", None, 42])
    def test_rejects_everything_else(self, value):
        assert not is_valid_object_id(value)


class TestUserValidators:
    def test_create_returns_cleaned_fields(self):
        fields = validate_user_create({"name": "  Ada ", "email": "ada@example.com", "role": "x"})
        assert fields == {"name": "Ada", "email": "ada@example.com"}

    @pytest.mark.parametrize(
        "payload",
        [
            {"email": "ada@example.com"},
            {"name": "Ada"},
            {"name": "", "email": "ada@example.com"},
            {"name": "Ada", "email": None},
            {"name": "Ada", "email": "not-an-email"},
        ],
    )
    def test_create_rejects_missing_or_empty_fields(self, payload):
        with pytest.raises(ValidationError):
            validate_user_create(payload)

    def test_create_message_names_missing_fields(self):
        with pytest.raises(ValidationError) as info:
            validate_user_create({})
        assert "name is required" in info.value.message
        assert "email is required" in info.value.message

    def test_update_requires_one_field(self):
        with pytest.raises(ValidationError, match="At least one of name or email"):
            validate_user_update({})

    def test_update_keeps_only_supplied_fields(self):
        assert validate_user_update({"name": "Grace"}) == {"name": "Grace"}


class TestProductValidators:
    def test_create_allows_zero_price(self):
        fields = validate_product_create({"title": "Dune", "author": "Herbert", "price": 0})
        assert fields == {"title": "Dune", "author": "Herbert", "price": 0}

    @pytest.mark.parametrize(
        "payload",
        [
            {"title": "Dune", "author": "Herbert"},
            {"title": "Dune", "author": "Herbert", "price": None},
            {"title": "Dune", "author": "Herbert", "price": -1},
            {"title": "Dune", "author": "Herbert", "price": "9.99"},
            {"title": "Dune", "author": "Herbert", "price": True},
            {"title": "", "author": "Herbert", "price": 1},
            {"title": "Dune", "author": "   ", "price": 1},
        ],
    )
    def test_create_rejects_invalid_payloads(self, payload):
        with pytest.raises(ValidationError):
            validate_product_create(payload)

    def test_replace_follows_create_rules(self):
        with pytest.raises(ValidationError, match="author is required"):
            validate_product_replace({"title": "Dune", "price": 5})
        assert validate_product_replace({"title": "Dune", "author": "Herbert", "price": 5})["price"] == 5

    def test_partial_update_requires_at_least_one_field(self):
        with pytest.raises(ValidationError, match="At least one of title, author or price"):
            validate_product_update({"title": None})

    def test_partial_update_omits_unsupplied_fields(self):
        assert validate_product_update({"price": 12.5}) == {"price": 12.5}
        assert validate_product_update({"price": 0}) == {"price": 0}

    def test_partial_update_checks_supplied_fields(self):
        with pytest.raises(ValidationError):
            validate_product_update({"title": ""})
        with pytest.raises(ValidationError):
            validate_product_update({"price": -5})


class TestOrderValidators:
    def test_create_accepts_quantity_one(self):
        fields = validate_order_create({"userId": USER_ID, "productId": PRODUCT_ID, "quantity": 1})
        assert fields == {"userId": USER_ID, "productId": PRODUCT_ID, "quantity": 1}

    @pytest.mark.parametrize("quantity", [0, -3, 1.5, "2", None, True])
    def test_create_rejects_bad_quantity(self, quantity):
        with pytest.raises(ValidationError):
            validate_order_create({"userId": USER_ID, "productId": PRODUCT_ID, "quantity": quantity})

    def test_create_rejects_malformed_ids(self):
        with pytest.raises(ValidationError, match="userId"):
            validate_order_create({"userId": "abc", "productId": PRODUCT_ID, "quantity": 1})
        with pytest.raises(ValidationError, match="productId"):
            validate_order_create({"userId": USER_ID, "productId": "abc", "quantity": 1})

    def test_replace_requires_every_field(self):
        with pytest.raises(ValidationError):
            validate_order_replace({"quantity": 2})

    def test_partial_update_allows_empty_body(self):
        assert validate_order_update({}) == {}

    def test_partial_update_checks_supplied_fields(self):
        assert validate_order_update({"quantity": 4}) == {"quantity": 4}
        with pytest.raises(ValidationError):
            validate_order_update({"quantity": 0})
        with pytest.raises(ValidationError):
            validate_order_update({"productId": "not-an-id"})


@pytest.mark.parametrize("payload", [None, [], "text", 3])
def test_non_object_bodies_are_rejected(payload):
    with pytest.raises(ValidationError, match="JSON object"):
        validate_order_update(payload)


@pytest.mark.parametrize("price", [float("inf"), float("-inf"), float("nan")])
def test_non_finite_prices_are_rejected(price):
    with pytest.raises(ValidationError, match="price"):
        validate_product_create({"title": "Dune", "author": "Herbert", "price": price})
    with pytest.raises(ValidationError, match="price"):
        validate_product_update({"price": price})


def test_quantity_must_fit_in_a_bson_int64():
    largest = 2**63 - 1
    assert validate_order_create({"userId": USER_ID, "productId": PRODUCT_ID, "quantity": largest})["quantity"] == largest
    with pytest.raises(ValidationError, match="quantity"):
        validate_order_create({"userId": USER_ID, "productId": PRODUCT_ID, "quantity": 2**63})
    with pytest.raises(ValidationError, match="quantity"):
        validate_order_update({"quantity": 10**30})


def test_user_email_must_be_an_address():
    with pytest.raises(ValidationError, match="email"):
        validate_user_create({"name": "Bob", "email": "bob"})
