"""
Order service: CRUD over the ``orders`` collection.

``userId`` and ``productId`` are only checked for identifier syntax.
Whether the referenced user or product exists is never looked up, so an
order may point at records that were never created or have been deleted.
"""

from main import Resource, create_app, run
from validators import validate_order_create, validate_order_update

ORDERS = Resource(
    entity="Order",
    collection="orders",
    service="order-service",
    port_env="PORT_ORDERS",
    default_port=3003,
    validate_create=validate_order_create,
    validate_update=validate_order_update,
)

app = create_app(ORDERS)


if __name__ == "__main__":
    run(ORDERS)
