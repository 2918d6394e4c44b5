from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from urllib.parse import unquote


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes"}


@dataclass
class Settings:
    app_name: str = field(default_factory=lambda: os.getenv("APP_NAME", "CV Desk"))
    environment: str = field(default_factory=lambda: os.getenv("ENV", "development"))
    database_url: str = field(default_factory=lambda: os.getenv("DATABASE_URL", "sqlite:///./db/cvdesk.db"))
    upload_dir: str = field(default_factory=lambda: os.getenv("UPLOAD_DIR", "./uploads"))
    max_cv_size_mb: int = field(default_factory=lambda: int(os.getenv("MAX_CV_SIZE_MB", "10")))
    auth_secret: str = field(default_factory=lambda: os.getenv("AUTH_SECRET", "cvdesk-dev-secret"))
    auth_token_ttl_seconds: int = field(
        default_factory=lambda: int(os.getenv("AUTH_TOKEN_TTL_SECONDS", str(60 * 60 * 12)))
    )
    default_admin_username: str = field(default_factory=lambda: os.getenv("DEFAULT_ADMIN_USERNAME", "admin"))
    default_admin_password: str = field(default_factory=lambda: os.getenv("DEFAULT_ADMIN_PASSWORD", "admin1"))
    default_admin_email: str = field(default_factory=lambda: os.getenv("DEFAULT_ADMIN_EMAIL", "admin@example.com"))
    seed_reference_data: bool = field(default_factory=lambda: _env_bool("SEED_REFERENCE_DATA", "true"))
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))
    host: str = field(default_factory=lambda: os.getenv("HOST", "127.0.0.1"))
    port: int = field(default_factory=lambda: int(os.getenv("PORT", "8000")))
    cors_origins: str = field(
        default_factory=lambda: os.getenv("CORS_ORIGINS", "http://localhost:5173,http://127.0.0.1:8000")
    )

    @property
    def cors_origin_list(self) -> list[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    @property
    def max_cv_size_bytes(self) -> int:
        return self.max_cv_size_mb * 1024 * 1024

    def ensure_directories(self) -> None:
        Path(self.upload_dir).mkdir(parents=True, exist_ok=True)
        self._ensure_sqlite_directory()

    def _ensure_sqlite_directory(self) -> None:
        if not self.database_url.startswith("sqlite:///"):
            return
        raw_path = self.database_url.replace("sqlite:///", "", 1)
        if not raw_path or raw_path == ":memory:":
            return
        db_path = Path(unquote(raw_path))
        if not db_path.is_absolute():
            db_path = Path(".") / db_path
        db_path.parent.mkdir(parents=True, exist_ok=True)
