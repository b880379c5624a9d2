import os

BASE_DIR = os.path.abspath(os.path.dirname(__file__))

DEFAULT_PRODUCTION_ORIGINS = "https://visits.example.com,https://www.visits.example.com"


def _split_origins(value: str) -> list:
    return [o.strip() for o in (value or "").split(",") if o.strip()]


class Config:
    # Deployment environment: "development" or "production"
    APP_ENV = os.getenv("APP_ENV", "development").lower()

    # Listening address
    HOST = os.getenv("HOST", "127.0.0.1")
    PORT = int(os.getenv("PORT", "3000"))

    # Durable visit log stored as <DATA_DIR>/visits.json
    DATA_DIR = os.getenv("DATA_DIR", os.path.join(BASE_DIR, "data"))
    VISITS_FILENAME = os.getenv("VISITS_FILENAME", "visits.json")

    # Open in development, fixed allow-list in production
    if APP_ENV == "production":
        CORS_ORIGINS = _split_origins(
            os.getenv("CORS_ALLOWED_ORIGINS", DEFAULT_PRODUCTION_ORIGINS)
        )
    else:
        CORS_ORIGINS = "*"

    # Edge proxy header checked before X-Forwarded-For
    PLATFORM_FORWARDED_HEADER = os.getenv(
        "PLATFORM_FORWARDED_HEADER", "X-Vercel-Forwarded-For"
    )

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

    DEBUG = False
