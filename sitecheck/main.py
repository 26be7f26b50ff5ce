import logging
import logging.config
import os

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from sitecheck.config import get_settings, mask_key
from sitecheck.routers.classify import limiter, router as classify_router

logging.config.dictConfig(
    {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "json": {
                "format": '{"time": "%(asctime)s", "level": "%(levelname)s", "logger": "%(name)s", "message": "%(message)s"}',
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "json",
            },
        },
        "root": {"level": "INFO", "handlers": ["console"]},
    }
)

logger = logging.getLogger(__name__)

settings = get_settings()
if not settings.openai_api_key:
    logger.warning("OPENAI_API_KEY is empty – AI will fall back to heuristic")
logger.info(
    "BOOT: USE_AI=%s MODEL=%s KEY_SET=%s KEY=%s",
    settings.use_ai,
    settings.openai_model,
    bool(settings.openai_api_key),
    mask_key(settings.openai_api_key),
)

app = FastAPI(
    title="site-check – Website Topic Classifier",
    description="Fetches a URL, extracts the visible text, and describes what the site is about.",
    version="1.0.0",
)

# Rate-limiting state
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled exception for %s", request.url)
    return JSONResponse(status_code=500, content={"detail": "An unexpected error occurred."})


app.include_router(classify_router)


@app.get("/", summary="Service greeting")
async def root() -> dict:
    return {"message": "Hello from site-check"}


@app.get("/healthz", summary="Health check", response_class=PlainTextResponse)
async def healthz() -> str:
    return "ok"


def run() -> None:
    """Serve the API on ``$PORT`` (default 8080)."""
    uvicorn.run(app, host="0.0.0.0", port=int(os.environ.get("PORT", "8080")), log_config=None)
