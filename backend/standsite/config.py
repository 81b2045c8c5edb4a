import os
from datetime import timedelta
from dotenv import load_dotenv

load_dotenv()

_TRUE = {"1", "true", "yes", "on"}


def env_bool(name, default=False):
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in _TRUE


class BaseConfig:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret")
    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", SECRET_KEY)
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(
        minutes=int(os.getenv("JWT_ACCESS_TOKEN_MINUTES", "60"))
    )
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Object storage: "local" keeps files under UPLOAD_FOLDER, "supabase"
    # talks to the hosted storage REST API.
    STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "local")
    UPLOAD_FOLDER = os.getenv("UPLOAD_FOLDER", "uploads")
    MEDIA_URL_PREFIX = os.getenv("MEDIA_URL_PREFIX", "/media")
    SUPABASE_URL = os.getenv("SUPABASE_URL", "")
    SUPABASE_SERVICE_ROLE_KEY = os.getenv("SUPABASE_SERVICE_ROLE_KEY", "")
    STORAGE_TIMEOUT = float(os.getenv("STORAGE_TIMEOUT", "30"))

    # Public site cache invalidation hook
    REVALIDATE_URL = os.getenv("REVALIDATE_URL", "")
    REVALIDATE_SECRET = os.getenv("REVALIDATE_SECRET", "")
    REVALIDATE_TIMEOUT = float(os.getenv("REVALIDATE_TIMEOUT", "5"))

    ADMIN_AUTH_REQUIRED = env_bool("ADMIN_AUTH_REQUIRED", True)
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

    # Largest policy is the 100MB company profile PDF
    MAX_CONTENT_LENGTH = 110 * 1024 * 1024

    CONTACT_DEFAULT_EMAIL = os.getenv("CONTACT_DEFAULT_EMAIL", "info@chroniclesexhibits.com")

    @classmethod
    def validate(cls):
        """Hook for configs that must fail fast on missing settings."""


class DevelopmentConfig(BaseConfig):
    DEBUG = True
    SQLALCHEMY_DATABASE_URI = os.getenv("DEV_DATABASE_URI", "sqlite:///standsite-dev.db")
    LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG").upper()


class TestingConfig(BaseConfig):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    JWT_SECRET_KEY = "testing-jwt-secret-with-enough-length"
    STORAGE_BACKEND = "local"
    REVALIDATE_URL = "http://site.test/api/revalidate"
    REVALIDATE_SECRET = "testing"
    ADMIN_AUTH_REQUIRED = True


class ProductionConfig(BaseConfig):
    DEBUG = False
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URI")

    @classmethod
    def validate(cls):
        if not cls.SQLALCHEMY_DATABASE_URI:
            raise RuntimeError("Please define the DATABASE_URI environment variable")
        if cls.STORAGE_BACKEND == "supabase" and not (
            cls.SUPABASE_URL and cls.SUPABASE_SERVICE_ROLE_KEY
        ):
            raise RuntimeError(
                "Supabase storage requires SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY"
            )


config_by_name = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig
}
