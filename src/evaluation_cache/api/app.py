from typing import Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from evaluation_cache.api.dependencies import HandlerDep, lifespan
from evaluation_cache.config import settings
from evaluation_cache.dto import (
    CollectionAggregateResponse,
    ErrorResponse,
    EvaluationResponse,
    HealthCheckResponse,
)
from evaluation_cache.logging_config import setup_logging

setup_logging(level=settings.log_level, json_output=settings.log_json)

app = FastAPI(
    title="Evaluation Cache API",
    description="Cached AI quality evaluation of programming tutorials and playlists",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,  # type: ignore[arg-type]
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

_ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    404: {"model": ErrorResponse, "description": "Item not found"},
    503: {"model": ErrorResponse, "description": "Model provider unavailable"},
    500: {"model": ErrorResponse, "description": "Evaluation failed"},
}


@app.get("/")
async def root() -> dict[str, Any]:
    """Root endpoint with API information."""
    return {
        "name": "Evaluation Cache API",
        "version": "0.1.0",
        "description": "Cached AI quality evaluation of programming tutorials and playlists",
        "endpoints": {
            "video": "/evaluations/videos/{video_id}",
            "playlist": "/evaluations/playlists/{playlist_id}",
            "stats": "/stats",
            "health": "/health",
            "docs": "/docs",
        },
    }


@app.get("/health", response_model=HealthCheckResponse)
async def health(handler: HandlerDep) -> HealthCheckResponse:
    """Health check endpoint."""
    return await handler.health_check()


@app.get("/stats", response_model=dict[str, Any])
async def get_stats(handler: HandlerDep) -> dict[str, Any]:
    """Get cache, store and credential statistics."""
    return await handler.get_stats()


@app.get(
    "/evaluations/videos/{video_id}",
    response_model=EvaluationResponse,
    responses=_ERROR_RESPONSES,
)
async def evaluate_video(video_id: str, handler: HandlerDep) -> EvaluationResponse:
    """Evaluate a single video (cached)."""
    return await handler.evaluate_video(video_id)


@app.get(
    "/evaluations/playlists/{playlist_id}",
    response_model=CollectionAggregateResponse,
    responses=_ERROR_RESPONSES,
)
async def evaluate_playlist(playlist_id: str, handler: HandlerDep) -> CollectionAggregateResponse:
    """Evaluate a playlist from a sample of its videos (cached)."""
    return await handler.evaluate_playlist(playlist_id)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "evaluation_cache.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
    )
