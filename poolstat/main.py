#!/usr/bin/env python3
"""
poolstat API Service

FastAPI application exposing zpool status and list parsing.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import get_config
from .api.routers import zpool_router
from .zpool.infrastructure.logging.structured_logger import configure_logging

config = get_config()

configure_logging(config.server.log_level)
logger = logging.getLogger("poolstat.main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting poolstat API service...")
    yield
    logger.info("Shutting down poolstat API service...")


app = FastAPI(
    title="poolstat API",
    description="zpool health and device topology",
    version="1.0.0",
    lifespan=lifespan,
    docs_url="/docs" if config.server.enable_docs else None,
    redoc_url="/redoc" if config.server.enable_docs else None
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.server.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type"],
)

app.include_router(zpool_router)


@app.get("/health")
async def health():
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=config.server.host, port=config.server.port)
