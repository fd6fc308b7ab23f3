"""Main FastAPI application entry point for Tripwise."""

from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config.settings import settings
from config.database import create_indexes, database
from config.logging_utils import log_success
from api.errors import register_exception_handlers
from api.routers.auth import router as auth_router
from api.routers.trips import router as trips_router
from api.routers.notes import router as notes_router
from api.routers.preferences import router as preferences_router
from api.routers.generated_plans import router as generated_plans_router
from services.gemini_service import gemini_service


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle startup and shutdown events."""
    await database.connect()
    log_success(f"Connected to MongoDB: {settings.DATABASE_NAME}", prefix="APP")
    await create_indexes()
    log_success("Database indexes created", prefix="APP")
    yield
    gemini_service.close()
    await database.disconnect()
    log_success("Disconnected from MongoDB", prefix="APP")


def create_app(use_lifespan: bool = True) -> FastAPI:
    """Build the application; tests pass use_lifespan=False and bind their own database."""
    application = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="Trip planning API with AI-generated itineraries",
        lifespan=lifespan if use_lifespan else None
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.get_cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(application)

    application.include_router(auth_router)
    application.include_router(trips_router)
    application.include_router(notes_router)
    application.include_router(preferences_router)
    application.include_router(generated_plans_router)

    @application.get("/api")
    async def api_info():
        """API information endpoint."""
        return {
            "name": settings.APP_NAME,
            "version": settings.APP_VERSION,
            "status": "running"
        }

    @application.get("/api/health")
    async def health_check():
        """Health check endpoint for monitoring."""
        db_healthy = await database.health_check()
        return {
            "status": "healthy" if db_healthy else "unhealthy",
            "database": "connected" if db_healthy else "disconnected"
        }

    return application


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "app:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG
    )
