import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import uvicorn

from src.core.database import close_db, init_db
from src.core.logging import configure_logging
from src.core.response.handlers import register_exception_handlers
from src.core.config import settings

# Import routers from apps
from src.apps.blog import post_router
from src.apps.users import auth_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: Create database tables
    configure_logging()
    await init_db()
    logger.info("Database connection established")
    yield
    # Shutdown: Release pooled connections
    await close_db()
    logger.info("Shutting down")


# Create FastAPI app
app = FastAPI(
    title=settings.PROJECT_NAME,
    description=settings.PROJECT_INFO,
    version=settings.PROJECT_VERSION,
    lifespan=lifespan,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Map service, validation and unexpected errors to one error body
register_exception_handlers(app)


# Health check endpoint
@app.get("/", tags=["Health"])
async def root():
    """Root endpoint with health check."""
    return {"message": "Server is running", "status": "healthy", "version": settings.PROJECT_VERSION}


@app.get("/health", tags=["Health"])
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "message": "Service is running normally"}


# Include app routers
app.include_router(auth_router)
app.include_router(post_router)


if __name__ == "__main__":
    uvicorn.run(
        "src.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,  # Enable auto-reload in development
        log_level="info",
    )
