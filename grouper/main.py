"""FastAPI application exposing the grouper over HTTP.

Run with:
    uvicorn grouper.main:app --reload
"""

import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .config import Config
from .logger import configure_logging
from .routes import grouping_router

config = Config()

configure_logging(config.LOG_LEVEL, config.LOG_FILE)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Grouper API",
    description="Evolve balanced, representative groups from a roster CSV",
    version=__version__,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)

app.include_router(grouping_router)


@app.get("/")
async def root():
    """Health check."""
    return {"message": "Grouper API", "status": "running", "version": __version__}


if __name__ == "__main__":
    import uvicorn
    logger.info(f"Starting Grouper API on {config.HOST}:{config.PORT}")
    uvicorn.run(app, host=config.HOST, port=config.PORT)
