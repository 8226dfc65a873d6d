from dotenv import load_dotenv

# Load .env before the config module reads the environment
load_dotenv()

import time

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from irodori.api.v1 import palette_router, router as v1_router
from irodori.config import config
from irodori.schemas import HealthResponse
from irodori.utils.ids import generate_request_id
from irodori.utils.logging import get_logger
from irodori.utils.metrics import get_metrics

log = get_logger()

app = FastAPI(
    title="Irodori Color Service",
    description="Harmony palettes, color conversion and hair color extraction",
    version=config.VERSION
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.allowed_origins(),
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
    expose_headers=["X-Request-ID"]
)


@app.middleware("http")
async def request_context(request: Request, call_next):
    """Attach a request id and record request timing."""
    request_id = request.headers.get("X-Request-ID") or generate_request_id()
    request.state.request_id = request_id
    start_time = time.time()

    response = await call_next(request)

    duration_ms = (time.time() - start_time) * 1000
    response.headers["X-Request-ID"] = request_id
    if config.METRICS_ENABLED:
        get_metrics().record_timing("request", duration_ms)
    log.debug(
        f"{request.method} {request.url.path} -> {response.status_code}",
        extra={"request_id": request_id, "duration_ms": round(duration_ms, 2)}
    )
    return response


@app.exception_handler(Exception)
async def unhandled_exception(request: Request, exc: Exception):
    request_id = getattr(request.state, "request_id", None)
    log.error(f"Unhandled error on {request.url.path}: {exc}", extra={"request_id": request_id})
    if config.METRICS_ENABLED:
        get_metrics().increment_failure_count("internal")
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


app.include_router(palette_router)
app.include_router(v1_router)


@app.get("/healthz", response_model=HealthResponse)
def health_check():
    """Health check endpoint."""
    return HealthResponse(ok=True, version=config.VERSION, service=config.SERVICE_NAME)


@app.get("/metrics")
def metrics_summary():
    """In-process metrics summary."""
    return get_metrics().get_summary()


@app.get("/")
def root():
    return {
        "service": config.SERVICE_NAME,
        "version": config.VERSION,
        "endpoints": [
            "/api/palette/generate",
            "/v1/colors/convert",
            "/v1/harmony",
            "/v1/hair/extract",
            "/v1/hair/extract/b64",
            "/v1/hair/presets",
        ]
    }
