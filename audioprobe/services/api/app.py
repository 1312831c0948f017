from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Optional

import anyio.to_thread
from fastapi import FastAPI

from audioprobe.common.concurrency.admission_gate import AdmissionGate
from audioprobe.common.logging import get_logger
from audioprobe.common.settings import Settings, get_settings
from audioprobe.services.api.errors import install_error_handlers
from audioprobe.services.api.routers import analyze, health


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    cfg = settings or get_settings()
    logger = get_logger(level=cfg.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Sync endpoints run on anyio's worker threads; gate waits park those threads.
        anyio.to_thread.current_default_thread_limiter().total_tokens = cfg.api.worker_threads
        logger.info(
            "%s ready on %s:%s (env=%s, max concurrent probes=%d)",
            cfg.app_name,
            cfg.api.host,
            cfg.api.port,
            cfg.app_env,
            cfg.concurrency.max_concurrent_probes,
        )
        yield

    app = FastAPI(
        title="Audioprobe API",
        version="0.1.0",
        docs_url=f"{cfg.api.prefix}/docs",
        openapi_url=f"{cfg.api.prefix}/openapi.json",
        lifespan=lifespan,
    )

    # Fixed for the life of the process
    app.state.settings = cfg
    app.state.admission_gate = AdmissionGate(cfg.concurrency.max_concurrent_probes)

    install_error_handlers(app)

    # Routers
    app.include_router(health.router)
    app.include_router(analyze.router, prefix=cfg.api.prefix)
    return app


app = create_app()


def run() -> None:
    import uvicorn

    cfg = get_settings()
    uvicorn.run(create_app(cfg), host=cfg.api.host, port=cfg.api.port, log_level=cfg.log_level.lower())
