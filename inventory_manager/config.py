"""Environment-based configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def resolve_upload_folder() -> str:
    """Resolve the directory uploaded item images are stored in.

    Priority:
      1) UPLOAD_FOLDER (explicit)
      2) ./uploads next to the working directory
    """

    explicit = os.getenv("UPLOAD_FOLDER")
    if explicit:
        return explicit
    return os.path.abspath("./uploads")


@dataclass(frozen=True)
class BaseConfig:
    """Base configuration shared by all environments."""

    APP_ENV: str = os.getenv("APP_ENV", "development")
    SECRET_KEY: str = os.getenv("SECRET_KEY", "dev-secret")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # Mongo backend
    MONGODB_URI: str = os.getenv("MONGODB_URI", "mongodb://localhost:27017")
    MONGODB_DB: str = os.getenv("MONGODB_DB", "inventory_manager")
    MONGODB_TIMEOUT_MS: int = _int_env("MONGODB_TIMEOUT_MS", 5000)

    # Atlas Search index names
    ITEMS_SEARCH_INDEX: str = os.getenv("ITEMS_SEARCH_INDEX", "items")
    CATEGORIES_SEARCH_INDEX: str = os.getenv("CATEGORIES_SEARCH_INDEX", "categories")

    # Uploads
    UPLOAD_FOLDER: str = resolve_upload_folder()
    MAX_CONTENT_LENGTH: int = _int_env("MAX_CONTENT_LENGTH", 5 * 1024 * 1024)
    ALLOWED_IMAGE_EXTENSIONS: tuple[str, ...] = ("png", "jpg", "jpeg", "gif", "webp")

    # Dashboard / request fan-out
    INDEX_IMAGE_LIMIT: int = _int_env("INDEX_IMAGE_LIMIT", 5)
    PARALLEL_WORKERS: int = _int_env("PARALLEL_WORKERS", 4)

    TESTING: bool = False


@dataclass(frozen=True)
class DevelopmentConfig(BaseConfig):
    """Development configuration."""

    DEBUG: bool = True


@dataclass(frozen=True)
class ProductionConfig(BaseConfig):
    """Production configuration."""

    DEBUG: bool = False


@dataclass(frozen=True)
class TestingConfig(BaseConfig):
    """Configuration used by the test-suite."""

    DEBUG: bool = False
    TESTING: bool = True
    MONGODB_DB: str = "inventory_manager_test"
    MONGODB_TIMEOUT_MS: int = 200


def get_config() -> type[BaseConfig]:
    """Resolve configuration class based on APP_ENV."""

    env = os.getenv("APP_ENV", "development").lower().strip()
    if env == "production":
        return ProductionConfig
    if env == "testing":
        return TestingConfig
    return DevelopmentConfig
