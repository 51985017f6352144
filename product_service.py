"""
Product service: CRUD over the ``products`` collection.

``PUT /products/{id}`` is a partial update: at least one of title,
author or price must be supplied and the rest keep their stored values.
"""

from main import Resource, create_app, run
from validators import validate_product_create, validate_product_update

PRODUCTS = Resource(
    entity="Product",
    collection="products",
    service="product-service",
    port_env="PORT_PRODUCTS",
    default_port=3002,
    validate_create=validate_product_create,
    validate_update=validate_product_update,
)

app = create_app(PRODUCTS)


if __name__ == "__main__":
    run(PRODUCTS)
