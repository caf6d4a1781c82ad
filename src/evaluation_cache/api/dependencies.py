"""Dependency injection configuration for FastAPI app.

Uses FastAPI's app.state pattern for storing service instances.

Pattern:
    - Services stored in app.state during lifespan
    - Dependency functions retrieve from request.app.state
    - Clean separation, no global mutable state
"""

import logging
from contextlib import asynccontextmanager
from typing import Annotated

from fastapi import Depends, FastAPI, Request

from evaluation_cache.container import ServiceContainer
from evaluation_cache.handlers import EvaluationHandler

logger = logging.getLogger(__name__)


def get_handler(request: Request) -> EvaluationHandler:
    """Dependency injection for EvaluationHandler from app.state.

    Args:
        request: FastAPI Request object

    Returns:
        The EvaluationHandler instance from app.state

    Raises:
        RuntimeError: If handler is not initialized
    """
    handler = getattr(request.app.state, "evaluation_handler", None)
    if handler is None:
        raise RuntimeError("EvaluationHandler not initialized. Check lifespan setup.")
    return handler


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for FastAPI app.

    Initializes all layers and stores in app.state:
    1. Container (repositories, rotator, caches, services)
    2. Service (business logic) - stored in app.state.evaluation_service
    3. Handler (HTTP endpoints) - stored in app.state.evaluation_handler

    Args:
        app: The FastAPI application instance

    Yields:
        None

    Cleanup:
        Closes outbound clients and removes all services from app.state
    """
    container = ServiceContainer.create()
    evaluation_handler = EvaluationHandler(
        evaluation_service=container.evaluation_service,
        rotator=container.rotator,
    )

    # Store in app.state (FastAPI pattern)
    app.state.container = container
    app.state.evaluation_service = container.evaluation_service
    app.state.evaluation_handler = evaluation_handler

    logger.info(f"Store healthy: {await container.evaluation_service.is_healthy()}")

    yield

    await container.aclose()
    del app.state.evaluation_handler
    del app.state.evaluation_service
    del app.state.container
    logger.info("Evaluation service shut down")


# Type aliases for cleaner dependency injection
HandlerDep = Annotated[EvaluationHandler, Depends(get_handler)]
