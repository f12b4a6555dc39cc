"""
FastAPI app entrypoint.
Configures logging, registers the routers and error handlers, and creates DB indexes at startup.
"""

import logging
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pymongo import ASCENDING, DESCENDING
from pymongo.errors import OperationFailure

from app.api.v1.endpoints import admin as admin_router
from app.api.v1.endpoints import appointments as appointments_router
from app.api.v1.endpoints import assessment as assessment_router
from app.api.v1.endpoints import auth as auth_router_module
from app.api.v1.endpoints import branding as branding_router
from app.api.v1.endpoints import categories as categories_router
from app.api.v1.endpoints import consultation_requests as consultation_router
from app.api.v1.endpoints import content as content_router
from app.api.v1.endpoints import messages as messages_router
from app.api.v1.endpoints import upload as upload_router
from app.api.v1.endpoints import users as users_router
from app.core.config import settings
from app.core.exceptions import AppError
from app.db.session import engine
from app.domains.appointments.models import AppointmentModel
from app.domains.assessments.models import AssessmentModel
from app.domains.consultations.models import ConsultationRequestModel
from app.domains.library.models import CategoryModel
from app.domains.messaging.models import MessageModel
from app.domains.users.models import UserModel

# --- Logging Configuration ---
LOGS_DIR = Path(settings.LOG_DIR)
LOGS_DIR.mkdir(exist_ok=True)
LOG_FILE = LOGS_DIR / "app.log"
for handler in logging.root.handlers[:]:
    logging.root.removeHandler(handler)
logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[
        logging.FileHandler(LOG_FILE),
        logging.StreamHandler()
    ]
)
for noisy in ("httpx", "httpcore", "botocore", "boto3"):
    logging.getLogger(noisy).setLevel(logging.WARNING)
logger = logging.getLogger(__name__)

app = FastAPI(title=settings.APP_NAME)

# CORS Middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routers
app.include_router(auth_router_module.router)
app.include_router(users_router.router)
app.include_router(admin_router.router)
app.include_router(assessment_router.router)
app.include_router(consultation_router.router)
app.include_router(appointments_router.router)
app.include_router(messages_router.router)
app.include_router(content_router.router)
app.include_router(categories_router.router)
app.include_router(branding_router.router)
app.include_router(upload_router.router)


# --- Error handlers ---
@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Report body/query validation failures as 400 with the first error message.
    """
    errors = exc.errors()
    message = "Invalid request"
    if errors:
        first = errors[0]
        field = ".".join(str(part) for part in first.get("loc", ())[1:])
        text = str(first.get("msg", "")).removeprefix("Value error, ")
        message = f"{field}: {text}" if field else text
    logger.warning(f"Validation error on {request.method} {request.url.path}: {message}")
    return JSONResponse(status_code=400, content={"detail": message})


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=True)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


@app.on_event("startup")
async def startup_event():
    logger.info("Application startup...")

    # Create DB Indexes
    try:
        await engine.get_collection(UserModel).create_index("email", unique=True)
        await engine.get_collection(AssessmentModel).create_index("user_id")
        await engine.get_collection(ConsultationRequestModel).create_index(
            [("user_id", ASCENDING), ("status", ASCENDING)]
        )
        await engine.get_collection(AppointmentModel).create_index(
            [("specialist_id", ASCENDING), ("appointment_date", DESCENDING)]
        )
        await engine.get_collection(MessageModel).create_index(
            [("conversation_id", ASCENDING), ("created_at", ASCENDING)]
        )
        categories = engine.get_collection(CategoryModel)
        await categories.create_index("name", unique=True)
        await categories.create_index("slug", unique=True)
        logger.info("Database indexes ensured successfully.")
    except OperationFailure as e:
        logger.error("Index creation failed due to a database operation error: %s", e)
    except Exception as e:
        logger.warning("A non-critical error occurred during index creation: %s", e)


@app.on_event("shutdown")
async def shutdown_event():
    logger.info("Application shutdown...")
    try:
        engine.client.close()
    except Exception as e:
        logger.warning("Error during motor client shutdown: %s", e)


@app.get("/")
async def health():
    return {"status": "ok"}
