from fastapi import FastAPI, Depends, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException
import time
from .auth import get_current_user
from .config import settings
from .db import engine
from .models import Base
from .logger import logger
from .exceptions import (
    StudioBaseException,
    studio_exception_handler,
    validation_exception_handler,
    http_exception_handler,
    generic_exception_handler,
)
from .routes import integrations, page_templates, projects, styles
from .routes import settings as settings_routes
from .schemas import HealthResponse

app = FastAPI(
    title="Comic Studio API",
    version="1.0.0",
    description="Catalog of page templates and visual styles for the comic studio"
)

app.add_exception_handler(StudioBaseException, studio_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(Exception, generic_exception_handler)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials="*" not in settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.middleware("http")
async def log_requests(request: Request, call_next):
    start_time = time.time()

    logger.info(
        f"Request: {request.method} {request.url.path}",
        extra={
            "method": request.method,
            "path": request.url.path,
            "query_params": dict(request.query_params),
        }
    )

    response = await call_next(request)

    duration = time.time() - start_time
    logger.info(
        f"Response: {response.status_code}",
        extra={
            "method": request.method,
            "path": request.url.path,
            "status_code": response.status_code,
            "duration_ms": round(duration * 1000, 2),
        }
    )

    return response

@app.on_event("startup")
async def startup():
    logger.info("Starting Comic Studio API")
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables created successfully")
    except Exception as e:
        logger.error(f"Failed to initialize database: {e}")
        raise

@app.on_event("shutdown")
async def shutdown():
    logger.info("Shutting down Comic Studio API")
    await engine.dispose()

# Everything except the health endpoints requires a bearer token
protected = [Depends(get_current_user)]
app.include_router(page_templates.router, dependencies=protected)
app.include_router(styles.router, dependencies=protected)
app.include_router(integrations.router, dependencies=protected)
app.include_router(settings_routes.router, dependencies=protected)
app.include_router(projects.router, dependencies=protected)

@app.get("/health", response_model=HealthResponse)
async def health_check():
    """Health check endpoint"""
    return {"status": "ok"}

@app.get("/")
async def root():
    return {"service": "comic-studio-api", "status": "ok"}
