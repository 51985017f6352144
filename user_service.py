"""
User service: CRUD over the ``users`` collection.

Emails are unique (a unique index backs the 409 response) and an empty
collection is seeded with one demo user at startup.

    uvicorn user_service:app --port 3001
"""

import logging

from errors import StoreError
from main import Resource, create_app, run
from repository import Repository
from validators import validate_user_create, validate_user_update

logger = logging.getLogger(__name__)

DEFAULT_USER = {"name": "Demo User", "email": "demo@example.com"}


def seed_default_user(repository: Repository) -> None:
    """Insert ``DEFAULT_USER`` when no user exists yet; failures are only logged."""
    try:
        if repository.count() == 0:
            repository.create(dict(DEFAULT_USER))
            logger.info("Seeded default user: %s", DEFAULT_USER["email"])
    except StoreError as exc:
        logger.error("Failed to seed default user: %s (%r)", exc.message, exc.cause)


USERS = Resource(
    entity="User",
    collection="users",
    service="user-service",
    port_env="PORT_USERS",
    default_port=3001,
    validate_create=validate_user_create,
    validate_update=validate_user_update,
    unique_fields=("email",),
    conflict_message="Email already exists",
    seed=seed_default_user,
)

app = create_app(USERS)


if __name__ == "__main__":
    run(USERS)
