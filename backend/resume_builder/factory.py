from datetime import datetime, timezone
from typing import Optional
import logging
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from resume_builder.api import auth, resume
from resume_builder.api.errors import register_exception_handlers
from resume_builder.core.config import Settings, get_settings
from resume_builder.core.database import Database
from resume_builder.scripts.seed_demo_data import seed_demo_data
from resume_builder.services.auth_service import AuthService
from resume_builder.services.photo_storage import PhotoStorage
from resume_builder.services.resume_service import ResumeService
from resume_builder.stores.credential_store import CredentialStore
from resume_builder.stores.resume_store import ResumeStore

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


def create_app(settings: Optional[Settings] = None, database: Optional[Database] = None) -> FastAPI:
    """Builds the application: settings, database, services, routers"""
    settings = settings or get_settings()
    configure_logging(settings.LOG_LEVEL)

    database = database or Database(settings.DATABASE_URL)
    database.create_all()

    credential_store = CredentialStore(database)
    resume_store = ResumeStore(database)

    app = FastAPI(
        title="Resume Builder API",
        description="API for building, previewing and exporting resumes",
        version="1.0.0"
    )
    app.state.settings = settings
    app.state.database = database
    app.state.auth_service = AuthService(credential_store, settings)
    app.state.resume_service = ResumeService(resume_store)
    app.state.photo_storage = PhotoStorage(settings.UPLOAD_DIR, settings.MAX_PHOTO_SIZE)

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS_LIST,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(auth.router, prefix="/api/auth", tags=["auth"])
    app.include_router(resume.router, prefix="/api/resume", tags=["resume"])

    # Profile photos
    app.mount("/uploads", StaticFiles(directory=str(app.state.photo_storage.upload_dir)), name="uploads")

    @app.get("/")
    def root():
        return {"message": "Resume Builder API", "version": "1.0.0"}

    @app.get("/api/health")
    def health(request: Request):
        return {
            "status": "OK",
            "database": request.app.state.database.backend_name,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    if settings.SEED_DEMO_DATA:
        seed_demo_data(app.state.auth_service, credential_store, app.state.resume_service)

    logger.info(f"Resume Builder API ready, database: {database.backend_name}")
    return app
