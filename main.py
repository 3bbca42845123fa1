from contextlib import asynccontextmanager

from fastapi import FastAPI
from shortlink_app.config import settings
from shortlink_app.database.connection import init_db
from shortlink_app.logging_config import setup_logging
from shortlink_app.middleware import LoggingMiddleware
from shortlink_app.api import urls, redirect
from shortlink_app.api.errors import register_exception_handlers

logger = setup_logging(settings.log_level, json_format=settings.log_json)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Create database tables (idempotent)
    init_db()
    logger.info(f"{settings.app_name} {settings.app_version} started ({settings.environment})")
    yield
    logger.info(f"{settings.app_name} shutting down")


# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="A URL shortener service built with FastAPI",
    debug=settings.debug,
    lifespan=lifespan
)

app.add_middleware(LoggingMiddleware)
register_exception_handlers(app)


@app.get("/")
def read_root():
    """Root endpoint with API information"""
    return {
        "message": f"Welcome to {settings.app_name}",
        "version": settings.app_version,
        "docs": "/docs",
        "redoc": "/redoc"
    }


@app.get("/health")
def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "environment": settings.environment}


######## Include routers
app.include_router(urls.router)
# Catch-all short code route goes last so it doesn't shadow the others
app.include_router(redirect.router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host=settings.host, port=settings.port)
