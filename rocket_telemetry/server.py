from contextlib import asynccontextmanager
import logging

from fastapi import APIRouter, FastAPI
from fastapi.responses import JSONResponse

from .config import DashboardConfig, load_config, setup_logging
from .loader import LOAD_ERROR_MESSAGE, TransportError, load_raw_text

logger = logging.getLogger(__name__)


def build_router(config: DashboardConfig) -> APIRouter:
    router = APIRouter(prefix="/api", tags=["telemetry"])
    csv_path = config.csv_path   # fixed at build time, never taken from the request

    @router.get("/telemetry")
    def get_telemetry():
        """Serve the raw CSV text of the flight log."""
        try:
            return {"data": load_raw_text(csv_path)}
        except TransportError:
            return JSONResponse({"error": LOAD_ERROR_MESSAGE}, status_code=500)

    return router


def create_app(config: DashboardConfig | None = None) -> FastAPI:
    config = config or load_config()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Lifespan context manager for startup/shutdown"""
        setup_logging(config.log_level, config.log_file)
        logger.info(f"Serving telemetry from {config.csv_path}")
        yield
        logger.info("Shutting down telemetry server...")

    app = FastAPI(title="Rocket Telemetry", lifespan=lifespan)
    app.state.config = config
    app.include_router(build_router(config))
    return app


app = create_app()
