from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from loguru import logger

from workout_engine.api.routes import router as workouts_router
from workout_engine.config.settings import settings
from workout_engine.core.logger import setup_logger
from workout_engine.persistence.session import get_engine


@asynccontextmanager
async def lifespan(_app: FastAPI):
    """Configure logging and make sure the database schema exists."""
    setup_logger(level=settings.log_level, log_file=settings.log_file)
    if not settings.openai_api_key:
        logger.warning("OPENAI_API_KEY is not set. Workouts will fall back to placeholders.")
    get_engine()
    logger.info("Database tables verified")
    yield


app = FastAPI(title="Workout Engine", lifespan=lifespan)
app.include_router(workouts_router)


@app.get("/health")
def health():
    return {"status": "ok"}


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log all HTTP requests."""
    logger.debug(f"Request: {request.method} {request.url.path}")
    response = await call_next(request)
    logger.debug(f"Response: {response.status_code} for {request.method} {request.url.path}")
    return response
