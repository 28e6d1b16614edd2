"""fieldreport API — FastAPI application serving the report form, dashboard and map.

Run:
    uvicorn fieldreport.api.main:app --reload
    # or
    fieldreport-api
"""

import logging
import uuid
from contextlib import asynccontextmanager

import mlflow
import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware

from fieldreport import __version__
from fieldreport.api.routes import get_state, router
from fieldreport.config import settings
from fieldreport.observability.logging import correlation_id, setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Load both sheets on startup."""
    setup_logging(json_format=settings.log_json, level=settings.log_level)

    mlflow.set_tracking_uri(settings.mlflow_tracking_uri)
    mlflow.set_experiment(settings.mlflow_experiment_name)
    logger.info("MLflow tracing enabled: %s", settings.mlflow_tracking_uri)

    state = get_state(app)
    await state.load_all()
    logger.info(
        "fieldreport API ready (%d administrative rows, %d submissions)",
        len(state.admin_rows),
        len(state.logs),
    )
    yield
    logger.info("Shutting down")


class CorrelationIDMiddleware(BaseHTTPMiddleware):
    """Set correlation ID from X-Request-ID header or generate a new one."""

    async def dispatch(self, request: Request, call_next):
        cid = request.headers.get("x-request-id", str(uuid.uuid4()))
        token = correlation_id.set(cid)
        try:
            response = await call_next(request)
            response.headers["x-request-id"] = cid
            return response
        finally:
            correlation_id.reset(token)


app = FastAPI(
    title="fieldreport",
    description="Field damage and needs reports for disaster response: "
    "cascading administrative selects, submission log search and map points.",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(CorrelationIDMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(router)


@app.get("/health")
async def health(request: Request):
    """Health check — row counts, loading flags and the last read errors."""
    state = get_state(request.app)
    checks = {
        "administrative": state.admin_error or "ok",
        "submissions": state.logs_error or "ok",
    }
    healthy = state.admin_error is None and state.logs_error is None
    return {
        "status": "healthy" if healthy else "degraded",
        "checks": checks,
        "rows": {"administrative": len(state.admin_rows), "submissions": len(state.logs)},
        "loading": {
            "administrative": state.admin_loading,
            "submissions": state.logs_loading,
            "submitting": state.submitting,
        },
    }


def run():
    """Entry point for fieldreport-api console script."""
    uvicorn.run("fieldreport.api.main:app", host="0.0.0.0", port=8000, reload=True)
