import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from . import config
from . import models  # noqa: F401
from .database import Base, engine
from .domain.advertisements import router as advertisements_router
from .domain.appointments import router as appointments_router
from .domain.feedback import router as feedback_router
from .domain.inventory import router as inventory_router
from .domain.inventory import store_router
from .domain.notifications import router as notifications_router
from .domain.payments import router as payments_router
from .domain.pets import router as pets_router
from .domain.refunds import router as refunds_router
from .domain.suppliers import router as suppliers_router
from .security_headers import SecurityHeadersMiddleware
from .uploads import get_upload_dir

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.WARNING)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Application starting up...")
    Base.metadata.create_all(bind=engine, checkfirst=True)
    logger.info("Database tables created successfully")
    logger.info(f"Serving uploads from {get_upload_dir().resolve()}")
    yield
    logger.info("Application shutting down...")


app = FastAPI(title="PetCare API", version="1.0.0", lifespan=lifespan)


def _describe_validation_error(error: dict) -> str:
    location = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
    field = ".".join(location)
    message = error.get("msg", "Invalid value")
    return f"Invalid value for '{field}': {message}" if field else message


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Report malformed request bodies and parameters as 400 with a readable message"""
    errors = exc.errors()
    logger.warning(f"Validation error for {request.url.path}: {errors}")
    detail = _describe_validation_error(errors[0]) if errors else "Invalid request"
    return JSONResponse(status_code=400, content={"detail": detail})


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


@app.middleware("http")
async def log_requests(request: Request, call_next):
    try:
        response = await call_next(request)
        return response
    except Exception as e:
        logger.error(f"{request.method} {request.url.path} - Error: {str(e)}")
        raise


if config.SECURITY_HEADERS_ENABLED:
    app.add_middleware(
        SecurityHeadersMiddleware, exclude_paths=["/health", "/docs", "/openapi.json"]
    )
    logger.info("Security headers enabled")
else:
    logger.warning("Security headers DISABLED - only use in development!")

logger.info(f"CORS allowed origins: {config.ALLOWED_ORIGINS}")

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
    allow_headers=["*"],
)

# Routes
app.include_router(advertisements_router)
app.include_router(appointments_router)
app.include_router(feedback_router)
app.include_router(payments_router)
app.include_router(refunds_router)
app.include_router(notifications_router)
app.include_router(pets_router)
app.include_router(inventory_router)
app.include_router(store_router)
app.include_router(suppliers_router)

app.mount(
    "/uploads",
    StaticFiles(directory=config.UPLOAD_DIR, check_dir=False),
    name="uploads",
)


@app.get("/")
def root():
    return {"message": "PetCare API is running"}


@app.get("/health")
def health():
    return {"status": "healthy"}
