"""
Generic resource service.

Every service (users, products, orders) is the same FastAPI application
built from a ``Resource`` description: collection name, URL path,
validators and, for users, a unique field and a seed routine. Handlers
follow one flow: validate, call the repository, map the outcome (or the
error) to a response.
"""

import logging
import sys
import time
from contextlib import asynccontextmanager, contextmanager
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterator, List, Optional, Tuple

import uvicorn
from fastapi import Body, Depends, FastAPI, HTTPException, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pymongo.database import Database

from config import settings
from database import connect
from errors import (
    ConfigurationError,
    ConflictError,
    DuplicateRecordError,
    NotFoundError,
    ServiceError,
    StoreError,
)
from logging_config import setup_logging
from repository import Repository

logger = logging.getLogger(__name__)

Validator = Callable[[Any], Dict[str, Any]]


@dataclass(frozen=True)
class Resource:
    """Everything that differs between the three services."""

    entity: str
    collection: str
    service: str
    port_env: str
    default_port: int
    validate_create: Validator
    validate_update: Validator
    unique_fields: Tuple[str, ...] = ()
    conflict_message: str = "Record already exists"
    seed: Optional[Callable[[Repository], None]] = None

    @property
    def path(self) -> str:
        return f"/{self.collection}"


def get_repository(request: Request) -> Repository:
    return request.app.state.repository


@contextmanager
def translate_errors(resource: Resource, action: str) -> Iterator[None]:
    """Turn domain errors raised inside the block into ``HTTPException``."""
    try:
        yield
    except DuplicateRecordError as exc:
        if not resource.unique_fields:
            logger.error("Failed to %s: %s", action, exc.cause)
            raise HTTPException(status_code=500, detail=f"Failed to {action}") from exc
        conflict = ConflictError(resource.conflict_message)
        raise HTTPException(status_code=conflict.status_code, detail=conflict.message) from exc
    except StoreError as exc:
        logger.error("Failed to %s: %s (%r)", action, exc.message, exc.cause)
        raise HTTPException(status_code=500, detail=f"Failed to {action}") from exc
    except ServiceError as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.message) from exc


def _build_routes(app: FastAPI, resource: Resource) -> None:
    name = resource.entity.lower()
    plural = resource.collection
    item_path = resource.path + "/{record_id}"
    not_found = f"{resource.entity} not found"

    @app.get(resource.path)
    def list_records(repo: Repository = Depends(get_repository)) -> List[Dict[str, Any]]:
        with translate_errors(resource, f"fetch {plural}"):
            return repo.list_all()

    @app.get(item_path)
    def get_record(record_id: str, repo: Repository = Depends(get_repository)) -> Dict[str, Any]:
        with translate_errors(resource, f"fetch {name}"):
            record = repo.get_by_id(record_id)
            if record is None:
                raise NotFoundError(not_found)
            return record

    @app.post(resource.path, status_code=status.HTTP_201_CREATED)
    def create_record(payload: Any = Body(None), repo: Repository = Depends(get_repository)) -> Dict[str, Any]:
        with translate_errors(resource, f"create {name}"):
            fields = resource.validate_create(payload)
            return repo.create(fields)

    @app.put(item_path)
    def update_record(
        record_id: str,
        payload: Any = Body(None),
        repo: Repository = Depends(get_repository),
    ) -> Dict[str, Any]:
        with translate_errors(resource, f"update {name}"):
            fields = resource.validate_update(payload)
            record = repo.update_by_id(record_id, fields)
            if record is None:
                raise NotFoundError(not_found)
            return record

    @app.delete(item_path, status_code=status.HTTP_204_NO_CONTENT)
    def delete_record(record_id: str, repo: Repository = Depends(get_repository)) -> Response:
        with translate_errors(resource, f"delete {name}"):
            if not repo.delete_by_id(record_id):
                raise NotFoundError(not_found)
        return Response(status_code=status.HTTP_204_NO_CONTENT)


def create_app(resource: Resource, database: Optional[Database] = None) -> FastAPI:
    """Build the service for ``resource``.

    ``database`` is the store handle to use; when omitted the process-wide
    connection is opened at startup. Indexes are ensured and the seed
    routine (if any) runs before the first request is served.
    """
    setup_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        handle = database if database is not None else connect()
        repository = Repository(handle[resource.collection])
        try:
            repository.ensure_indexes(resource.unique_fields)
        except StoreError as exc:
            logger.error("%s (%r)", exc.message, exc.cause)
        app.state.repository = repository
        if resource.seed is not None and not app.state.seeded:
            app.state.seeded = True
            resource.seed(repository)
        yield

    app = FastAPI(title=resource.service, lifespan=lifespan)
    app.state.repository = None
    app.state.seeded = False

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        duration = (time.perf_counter() - start) * 1000
        logger.info(
            "[%s] %s %s %s - %dms",
            resource.service, request.method, request.url.path, response.status_code, duration,
        )
        return response

    @app.exception_handler(RequestValidationError)
    async def malformed_request(_request: Request, exc: RequestValidationError) -> JSONResponse:
        # unparseable JSON bodies land here; report them like any other bad input
        return JSONResponse(status_code=400, content={"detail": "Request body must be valid JSON"})

    @app.get("/health")
    def health() -> Dict[str, str]:
        return {"status": "ok", "service": resource.service}

    _build_routes(app, resource)
    return app


def run(resource: Resource) -> None:
    """Connect, then serve ``resource`` until the process is stopped."""
    setup_logging(settings.log_level)
    try:
        database = connect()
    except ConfigurationError as exc:
        logger.critical("Failed to start %s: %s", resource.service, exc.message)
        sys.exit(1)

    app = create_app(resource, database)
    port = settings.port_for(resource.port_env, resource.default_port)
    logger.info("%s running on port %s", resource.service, port)
    uvicorn.run(app, host=settings.host, port=port)
