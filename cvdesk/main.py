from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from cvdesk.api import auth, cv_records, reference, user_profiles, version_history
from cvdesk.api.catalog import positions_roles_router, qualifications_router, tenders_router
from cvdesk.bootstrap import run_bootstrap
from cvdesk.config import Settings
from cvdesk.database import StorageProvider
from cvdesk.errors import register_exception_handlers
from cvdesk.logging_config import configure_logging
from cvdesk.services.blob_store import BlobStore


logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or Settings()
    configure_logging(settings.log_level)

    app = FastAPI(title=settings.app_name)
    app.state.settings = settings
    app.state.storage = StorageProvider(settings.database_url)
    app.state.blob_store = BlobStore(settings.upload_dir, settings.max_cv_size_bytes)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    @app.on_event("startup")
    def on_startup() -> None:
        settings.ensure_directories()
        run_bootstrap(app.state.storage, settings)
        logger.info("%s started (%s)", settings.app_name, settings.environment)

    @app.on_event("shutdown")
    def on_shutdown() -> None:
        app.state.storage.dispose()

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    app.include_router(auth.router, prefix="/api/auth", tags=["auth"])
    app.include_router(cv_records.router, prefix="/api/cv-records", tags=["cv_records"])
    app.include_router(user_profiles.router, prefix="/api/user-profiles", tags=["user_profiles"])
    app.include_router(version_history.router, prefix="/api/version-history", tags=["version_history"])
    app.include_router(qualifications_router, prefix="/api/qualifications", tags=["qualifications"])
    app.include_router(positions_roles_router, prefix="/api/positions-roles", tags=["positions_roles"])
    app.include_router(tenders_router, prefix="/api/tenders", tags=["tenders"])
    app.include_router(reference.router, prefix="/api/reference", tags=["reference"])
    return app


app = create_app()
