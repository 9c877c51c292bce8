import importlib.util
import logging
import sys
from pathlib import Path

import uvicorn
from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .apps.api import router
from .config.settings import Settings, get_settings
from .dependencies import get_assistant_runner
from .protocols import AssistantRunnerProtocol

settings = get_settings()

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


def get_mock_assistant_runner(
    settings: Settings = Depends(get_settings),
) -> AssistantRunnerProtocol:
    """Return the canned assistant used for local development."""
    # Imported lazily; the dev directory is only on sys.path in DEBUG mode
    from mocks.assistant_runner import MockAssistantRunner

    logger.info("DEBUG mode: Using MockAssistantRunner (via DI Override)")
    return MockAssistantRunner()


# --- Application ---

app = FastAPI(
    title="metaGOTHIC Git Server",
    version=settings.VERSION,
    description="Scans metaGOTHIC packages for changes and drafts commit messages",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    logger.info("%s %s", request.method, request.url.path)
    return await call_next(request)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Malformed bodies are client errors (400) rather than 422."""
    errors = [
        {"loc": list(error.get("loc", ())), "msg": error.get("msg", "")}
        for error in exc.errors()
    ]
    return JSONResponse(
        status_code=400, content={"error": "Invalid request", "detail": errors}
    )


# --- DEBUG overrides ---

if settings.DEBUG:
    dev_path = Path(__file__).parent.parent / "dev"
    if dev_path.exists():
        sys.path.append(str(dev_path))
        logger.info("'dev' directory added to sys.path for mock imports.")
        if importlib.util.find_spec("mocks.assistant_runner") is not None:
            app.dependency_overrides[get_assistant_runner] = get_mock_assistant_runner
        else:
            logger.warning("MockAssistantRunner not found, using the real assistant.")
    else:
        logger.warning("'dev' directory not found. Using the real assistant.")

app.include_router(router.git_router, prefix="/api")
app.include_router(router.claude_router, prefix="/api")


@app.get("/health")
async def health_check():
    """
    Simple health check endpoint to confirm the API is running.
    """
    return {"status": "ok"}


def run():
    logger.info(
        "Git server running on http://%s:%s",
        settings.GIT_SERVER_HOST,
        settings.GIT_SERVER_PORT,
    )
    uvicorn.run(app, host=settings.GIT_SERVER_HOST, port=settings.GIT_SERVER_PORT)


if __name__ == "__main__":
    run()
