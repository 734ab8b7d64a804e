"""
Configuration settings for the CRUD backends
"""

import os
import logging
from enum import Enum

logger = logging.getLogger(__name__)


class ServiceVariant(str, Enum):
    """Which of the two services a process serves"""
    CRUD = "crud"            # users only
    RELATIONS = "relations"  # users + posts


def _get_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def parse_service_variant(value: str) -> ServiceVariant:
    """Parse a variant name, raising ValueError for unknown names"""
    try:
        return ServiceVariant(value.strip().lower())
    except ValueError:
        allowed = ", ".join(v.value for v in ServiceVariant)
        raise ValueError(f"Unknown service variant '{value}' (expected one of: {allowed})")


# Environment configuration
DATABASE_URL = os.getenv("DATABASE_URL")
SERVICE_VARIANT = parse_service_variant(os.getenv("SERVICE_VARIANT", ServiceVariant.RELATIONS.value))
PORT = int(os.getenv("PORT", 8080))
API_PREFIX = os.getenv("API_PREFIX", "").rstrip("/")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Connection pool
DB_POOL_MIN_SIZE = int(os.getenv("DB_POOL_MIN_SIZE", 2))
DB_POOL_MAX_SIZE = int(os.getenv("DB_POOL_MAX_SIZE", 10))
DB_COMMAND_TIMEOUT = float(os.getenv("DB_COMMAND_TIMEOUT", 60))

# Create tables on startup when they are missing
AUTO_CREATE_SCHEMA = _get_bool("AUTO_CREATE_SCHEMA", True)

# CORS settings
ALLOWED_ORIGINS = [
    origin.strip()
    for origin in os.getenv("ALLOWED_ORIGINS", "http://localhost:3000").split(",")
    if origin.strip()
]

if not DATABASE_URL:
    logger.warning("DATABASE_URL not set - the database connection will fail at startup")
