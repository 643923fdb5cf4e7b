import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from starlette.middleware.cors import CORSMiddleware

from config import settings
from api.v1.router import api_router
from services.dashboard import open_dashboard
from services.db import engine, init_models
from services.storage import KeyValueStore, MemoryStore, SqlStore

_LOG = logging.getLogger(__name__)


def _configure_logging() -> None:
    # no-op when the root logger already has handlers (uvicorn, pytest)
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


async def _default_store() -> KeyValueStore:
    if settings.storage_backend == "memory":
        return MemoryStore()
    eng = engine()
    await init_models(eng)
    return SqlStore(eng)


def create_app(
    store: KeyValueStore | None = None,
    typing_delay_ms: tuple[float, float] | None = None,
) -> FastAPI:
    delay = typing_delay_ms or (settings.typing_delay_min_ms, settings.typing_delay_max_ms)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        _configure_logging()
        kv = store or await _default_store()
        app.state.dashboard = await open_dashboard(kv, typing_delay_ms=delay)
        _LOG.info("dashboard ready (env=%s, storage=%s)", settings.env_name, type(kv).__name__)
        yield
        await app.state.dashboard.close()

    app = FastAPI(title="FitTracker API", version="1.0.0", lifespan=lifespan)

    # CORS (local dashboard only – lock down in prod)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router, prefix="/api/v1")

    @app.get("/health", tags=["meta"])
    def health() -> dict[str, str]:
        return {"status": "ok", "env": settings.env_name}

    return app


app = create_app()
