import uuid

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import func, select, text
from structlog import get_logger

from app.config import settings
from app.core.logging import setup_logging
from app.database import AsyncSessionFactory, engine
from app.errors import register_exception_handlers
from app.models import Base, Property
from app.routers import landlords, properties, tenants

logger = get_logger()

app = FastAPI(title="Rental Marketplace API")
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
register_exception_handlers(app)
app.include_router(landlords.router, prefix=settings.API_PREFIX)
app.include_router(tenants.router, prefix=settings.API_PREFIX)
app.include_router(properties.router, prefix=settings.API_PREFIX)


@app.middleware("http")
async def bind_request_context(request: Request, call_next):
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(
        request_id=request.headers.get("X-Request-ID", str(uuid.uuid4())),
        method=request.method,
        path=request.url.path,
    )
    response = await call_next(request)
    logger.info("Request handled", status_code=response.status_code)
    return response


@app.on_event("startup")
async def startup_event():
    setup_logging(settings.LOG_LEVEL, settings.LOG_JSON)
    if settings.CREATE_TABLES_ON_STARTUP:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
    logger.info("Rental marketplace API started", port=settings.PORT)


@app.get("/health", tags=["health"])
async def health():
    details = {"status": "ok"}
    # Check DB connectivity
    try:
        async with AsyncSessionFactory() as session:
            await session.execute(text("SELECT 1"))
        details["database"] = "up"
    except Exception as e:
        details["status"] = "degraded"
        details["database"] = f"down: {str(e)}"
    # Config presence checks (no secrets exposed)
    details["config"] = {
        "db_url_set": bool(settings.DATABASE_URL),
        "jwt_secret_set": settings.JWT_SECRET not in (None, "", "your_jwt_secret"),
    }
    # Listing counts
    try:
        async with AsyncSessionFactory() as session:
            total = await session.scalar(select(func.count(Property.id)))
            available = await session.scalar(
                select(func.count(Property.id)).where(Property.availability.is_(True))
            )
        details["properties_count"] = int(total or 0)
        details["available_properties_count"] = int(available or 0)
    except Exception as e:
        details["properties_count"] = f"error: {str(e)}"
    return details
