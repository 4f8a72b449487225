"""Project-wide settings and defaults."""

import os
from pathlib import Path

# Base paths
PROJECT_ROOT = Path(__file__).resolve().parent.parent
DATA_DIR = Path(os.environ.get("WARRANTEL_DATA_DIR", str(PROJECT_ROOT / "data")))

# Record store: "json" (local file), "rest" (PostgREST / Supabase) or "memory"
STORE_BACKEND = os.environ.get("WARRANTEL_STORE", "json").lower()
RECORDS_PATH = DATA_DIR / "records.json"

# Remote record store
SUPABASE_URL = os.environ.get("SUPABASE_URL", "")
SUPABASE_KEY = os.environ.get("SUPABASE_KEY", "")
STORE_TIMEOUT_SECONDS = float(os.environ.get("STORE_TIMEOUT_SECONDS", "10"))

# Exports
EXPORT_DIR = DATA_DIR / "exports"

# Web
FLASK_SECRET_KEY = os.environ.get("FLASK_SECRET_KEY", "dev-warrantel-key")
APP_VERSION = "0.1.0"

# Logging
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
