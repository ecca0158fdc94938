from fastapi import FastAPI, Request, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from datetime import datetime
import logging
import time
from contextlib import asynccontextmanager

# Import configuration and database
from .config import settings
from .database import init_db, check_connection
from . import dependencies

# Import routers
from .routers import consultation

from .models.schemas import CaseType, HealthCheck, Language

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.debug else getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    # Startup
    logger.info("Starting Legal Consultation application...")

    try:
        init_db()
        logger.info("Database initialized")

        dependencies.init_services()
        logger.info("All services initialized successfully")

    except Exception as e:
        logger.error(f"Failed to initialize application: {str(e)}")
        raise

    yield

    # Shutdown
    logger.info("Shutting down Legal Consultation application...")

# Create FastAPI application
app = FastAPI(
    title="Legal Consultation Engine",
    description="AI legal consultation with Saudi legal references, firm knowledge and lawyer personalization",
    version="1.0.0",
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
    lifespan=lifespan
)

# Add middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if settings.debug else settings.get_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Request timing middleware
@app.middleware("http")
async def add_process_time_header(request: Request, call_next):
    """Add processing time to response headers."""
    start_time = time.time()
    response = await call_next(request)
    process_time = time.time() - start_time
    response.headers["X-Process-Time"] = str(process_time)
    return response

# Error handlers
@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    """Handle HTTP exceptions."""
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "detail": exc.detail,
            "status_code": exc.status_code,
            "timestamp": time.time()
        }
    )

@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handle general exceptions."""
    logger.error(f"Unhandled exception: {str(exc)}")
    return JSONResponse(
        status_code=500,
        content={
            "detail": "Internal server error",
            "status_code": 500,
            "timestamp": time.time()
        }
    )

# Include routers
app.include_router(consultation.router, prefix="/api/v1")

# Health check endpoint
@app.get("/health", response_model=HealthCheck)
async def health_check():
    """Health check endpoint."""
    db_status = "healthy" if check_connection() else "unhealthy"

    if dependencies.reference_store:
        knowledge_status = "healthy" if dependencies.reference_store.entry_count else "empty"
    else:
        knowledge_status = "not_initialized"

    consultation_status = "healthy" if dependencies.consultation_service else "not_initialized"

    overall_status = "healthy" if all(
        status == "healthy" for status in [db_status, knowledge_status, consultation_status]
    ) else "degraded"

    return HealthCheck(
        status=overall_status,
        timestamp=datetime.now(),
        version="1.0.0",
        services={
            "database": db_status,
            "knowledge_base": knowledge_status,
            "consultation": consultation_status
        }
    )

# Root endpoint
@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "Legal Consultation Engine API",
        "version": "1.0.0",
        "docs": "/docs" if settings.debug else "Documentation not available in production",
        "health": "/health"
    }

# API Info endpoint
@app.get("/api/v1/info")
async def api_info():
    """Get API information."""
    return {
        "name": "Legal Consultation Engine API",
        "version": "1.0.0",
        "description": "AI legal consultation for law firms",
        "features": [
            "Saudi legal reference retrieval",
            "Firm-specific and lawyer-personalized context",
            "Claude-generated consultation answers",
            "Answer validation, confidence and success estimates",
            "Lawyer feedback and verified answer improvements"
        ],
        "supported_case_types": [case_type.value for case_type in CaseType],
        "supported_languages": [language.value for language in Language],
        "knowledge_categories": (
            dependencies.reference_store.categories if dependencies.reference_store else []
        ),
        "model": settings.claude_model
    }

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "legal_consultation.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.debug,
        log_level="debug" if settings.debug else "info"
    )
