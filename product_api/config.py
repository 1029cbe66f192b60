# product_api/config.py

import os
from dotenv import load_dotenv

# Loads .env from the working directory when present; real env vars win
load_dotenv()

DEFAULT_PORT = 3000
DEFAULT_TIMEOUT_MS = 5000


def _int_env(key: str, default: int) -> int:
  raw = os.getenv(key, "").strip()
  if not raw:
    return default
  try:
    return int(raw)
  except ValueError:
    raise ValueError(f"Environment variable {key} must be an integer, got '{raw}'")


def get_mongodb_uri():
  """Connection string for the document database. Required, not validated."""
  return os.getenv("MONGODB_URI")


def get_mongodb_db():
  return os.getenv("MONGODB_DB") or None


def get_mongodb_timeout_ms() -> int:
  return _int_env("MONGODB_TIMEOUT_MS", DEFAULT_TIMEOUT_MS)


def get_host() -> str:
  return os.getenv("HOST", "0.0.0.0")


def get_port() -> int:
  return _int_env("PORT", DEFAULT_PORT)


def get_app_env() -> str:
  return os.getenv("APP_ENV", "development")


def get_log_dir() -> str:
  return os.getenv("LOG_DIR", "logs")
