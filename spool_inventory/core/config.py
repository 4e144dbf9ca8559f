# spool_inventory/core/config.py

import os
import logging
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

load_dotenv()

# =====================================================
# APPLICATION
# =====================================================
APP_ENV = os.getenv("APP_ENV", "development")
if APP_ENV not in {"development", "staging", "production"}:
    raise ValueError("APP_ENV must be development | staging | production")

IS_PRODUCTION = APP_ENV == "production"

APP_NAME = "Spool Inventory – Identity & Location API"
APP_VERSION = os.getenv("APP_VERSION", "1.0.0")
CORS_ORIGINS = os.getenv("CORS_ORIGINS", "")

# Overrides the env-derived default in core/logging.py
LOG_LEVEL = os.getenv("LOG_LEVEL")

# =====================================================
# LOCAL STORE
# =====================================================
DATABASE_URL = os.getenv(
    "DATABASE_URL",
    "sqlite+aiosqlite:///./spool_inventory.db",
)
if not DATABASE_URL.startswith("sqlite"):
    raise ValueError("DATABASE_URL must point at a local sqlite store")

DB_ECHO = os.getenv("DB_ECHO", "false").lower() == "true"

# One bundle per profile; only a single writer per profile is supported
STORE_PROFILE = os.getenv("STORE_PROFILE", "default")

if IS_PRODUCTION and DB_ECHO:
    logger.warning("DB_ECHO is enabled in production; SQL will be logged")
