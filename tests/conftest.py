"""Shared test fixtures for the resource services."""

import mongomock
import pytest
from fastapi.testclient import TestClient

import database
from main import create_app
from order_service import ORDERS
from product_service import PRODUCTS
from user_service import USERS

MISSING_ID = "64b7f0c2a1b2c3d4e5f60718"


@pytest.fixture
def mongo_db():
    """A fresh in-memory database per test."""
    return mongomock.MongoClient(tz_aware=True)["resource_services_test"]


@pytest.fixture(autouse=True)
def reset_connection():
    """Make sure no test leaks the process-wide connection into another."""
    yield
    database.client = None
    database.db = None


@pytest.fixture
def user_client(mongo_db):
    with TestClient(create_app(USERS, mongo_db)) as client:
        yield client


@pytest.fixture
def product_client(mongo_db):
    with TestClient(create_app(PRODUCTS, mongo_db)) as client:
        yield client


@pytest.fixture
def order_client(mongo_db):
    with TestClient(create_app(ORDERS, mongo_db)) as client:
        yield client
