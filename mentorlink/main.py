import logging
import time
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from . import models  # noqa: F401 - registers tables on Base
from .config import ALLOWED_ORIGINS
from .database import Base, engine
from .domain.analytics import router as analytics_router
from .domain.availability import mentor_availability_router
from .domain.availability import router as availability_router
from .domain.feedback import router as feedback_router
from .domain.notifications import router as notifications_router
from .domain.profiles import auth_router, mentors_router
from .domain.profiles import router as profiles_router
from .domain.sessions import router as sessions_router

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Reduce verbosity of third-party libraries
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.WARNING)

REQUEST_ID_HEADER = "X-Request-ID"


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Application starting up...")
    try:
        Base.metadata.create_all(bind=engine, checkfirst=True)
        logger.info("Database tables created successfully")
    except SQLAlchemyError as e:
        if "already exists" in str(e):
            logger.info("Database tables already exist (created by another worker)")
        else:
            logger.error(f"Failed to create database tables: {e}")

    try:
        from .rate_limiter import get_redis_client

        get_redis_client()
        logger.info("Redis connection established")
    except Exception as e:
        logger.warning(f"Redis connection failed - cache and rate limiting run fail-open: {e}")

    yield
    logger.info("Application shutting down...")


app = FastAPI(title="MentorLink API", version="1.0.0", lifespan=lifespan)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Convert 422 validation errors from HTTPBearer to 401 authentication errors
    when the issue is with the Authorization header
    """
    for error in exc.errors():
        if error.get("loc") and "authorization" in str(error.get("loc")).lower():
            logger.warning(
                f"Authentication failed for {request.url.path}: Missing or invalid Authorization header"
            )
            return JSONResponse(
                status_code=401,
                content={
                    "detail": "Not authenticated. Please provide a valid Bearer token in the Authorization header."
                },
            )

    logger.warning(f"Validation error for {request.url.path}: {exc.errors()}")
    return JSONResponse(status_code=422, content={"detail": jsonable_encoder(exc.errors())})


@app.exception_handler(SQLAlchemyError)
async def store_exception_handler(request: Request, exc: SQLAlchemyError):
    """Store failures end the action; the driver message is shown as-is"""
    message = str(getattr(exc, "orig", None) or exc)
    logger.error(f"❌ {request.method} {request.url.path} - Database error: {message}")
    return JSONResponse(status_code=500, content={"detail": message})


@app.middleware("http")
async def request_id_middleware(request: Request, call_next):
    """
    Tag every response with a request id.

    Clients send their own id per fetch and drop responses whose id is not
    the latest one they issued.
    """
    request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
    request.state.request_id = request_id
    start = time.time()
    response = await call_next(request)
    response.headers[REQUEST_ID_HEADER] = request_id
    elapsed_ms = (time.time() - start) * 1000
    if elapsed_ms > 1000:
        logger.warning(
            f"🐢 Slow request {request.method} {request.url.path} took {elapsed_ms:.0f}ms ({request_id})"
        )
    return response


logger.info(f"CORS allowed origins: {ALLOWED_ORIGINS}")

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
    allow_headers=["*"],
    expose_headers=[REQUEST_ID_HEADER],
)

# Routes
app.include_router(auth_router)
app.include_router(profiles_router)
app.include_router(mentors_router)
app.include_router(mentor_availability_router)
app.include_router(availability_router)
app.include_router(sessions_router)
app.include_router(feedback_router)
app.include_router(notifications_router)
app.include_router(analytics_router)


@app.get("/")
def root():
    return {"message": "MentorLink API is running"}


@app.get("/health")
def health():
    return {"status": "healthy"}


@app.get("/health/redis")
async def redis_health_check():
    """Check Redis connectivity for monitoring"""
    try:
        from .rate_limiter import get_redis_client

        redis_client = get_redis_client()

        start_time = time.time()
        redis_client.ping()
        response_time = (time.time() - start_time) * 1000

        return {
            "status": "healthy",
            "redis": {"connected": True, "response_time_ms": round(response_time, 2)},
        }
    except Exception as e:
        return {"status": "unhealthy", "redis": {"connected": False, "error": str(e)}}
