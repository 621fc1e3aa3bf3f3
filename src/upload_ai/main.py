"""FastAPI application entry point."""

from contextlib import asynccontextmanager

import uvicorn
from ddtrace import patch_all
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from upload_ai.database import init_db
from upload_ai.dependencies import get_config, get_db_engine, get_storage
from upload_ai.logging import setup_logging
from upload_ai.routes import (
    completions_router,
    health_router,
    prompts_router,
    videos_router,
)

logger = setup_logging()


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db(get_db_engine())
    get_storage().ensure_bucket_exists()
    logger.info("Server started", extra={"port": get_config().server.port})
    yield


def create_app() -> FastAPI:
    app = FastAPI(title="upload.ai", lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.include_router(health_router)
    app.include_router(prompts_router)
    app.include_router(videos_router)
    app.include_router(completions_router)
    return app


app = create_app()


def run():
    """Starts the API on the configured port with tracing enabled."""
    patch_all()
    config = get_config().server
    uvicorn.run(create_app(), host=config.host, port=config.port, log_config=None)


if __name__ == "__main__":
    run()
