from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from contextlib import asynccontextmanager
import logging

from app.core.database import Base, async_engine
from app.core.config import settings
from app.core.exceptions import ShopError, InternalError
from app.core.logging_config import setup_logging
from app.modules.customers.router import router as customers_router
from app.modules.invoices.router import router as invoices_router
from app.modules.gold_loans.router import router as gold_loans_router
from app.modules.inventory.router import router as inventory_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown events"""
    # Startup
    setup_logging(settings.LOG_LEVEL, settings.LOG_FORMAT, debug=settings.DEBUG)
    async with async_engine.begin() as conn:
        # Create all tables (for development - use Alembic in production)
        await conn.run_sync(Base.metadata.create_all)
    logger.info(f"{settings.APP_NAME} {settings.APP_VERSION} started ({settings.ENVIRONMENT})")

    yield

    # Shutdown
    await async_engine.dispose()


app = FastAPI(
    title="Gold Shop Management System API",
    description="Customers, invoices, gold loans and inventory for a jewelry shop",
    version=settings.APP_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)

# CORS Configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Error handlers
@app.exception_handler(ShopError)
async def shop_error_handler(request: Request, exc: ShopError):
    return JSONResponse(status_code=exc.status_code, content=jsonable_encoder(exc.to_dict()))


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=jsonable_encoder({"detail": "Validation failed", "errors": exc.errors()})
    )


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError):
    logger.exception(f"Database error on {request.method} {request.url.path}")
    error = InternalError("Database error")
    content = error.to_dict()
    if settings.ENVIRONMENT == "development":
        content["error"] = str(exc)
    return JSONResponse(status_code=error.status_code, content=content)


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    content = {"detail": "Internal Server Error"}
    if settings.ENVIRONMENT == "development":
        content["error"] = str(exc)
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=content)


# Include routers
app.include_router(customers_router)
app.include_router(invoices_router)
app.include_router(gold_loans_router)
app.include_router(inventory_router)


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "ok",
        "version": settings.APP_VERSION,
        "environment": settings.ENVIRONMENT
    }


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "message": f"Welcome to the {settings.APP_NAME} API",
        "version": settings.APP_VERSION,
        "docs": "/docs"
    }
