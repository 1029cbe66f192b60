# product_api/logger.py

import logging
from logging.handlers import RotatingFileHandler
import os
import sys
import json
from datetime import datetime, timezone

from product_api.config import get_app_env, get_log_dir


class JsonFormatter(logging.Formatter):
  """One JSON object per log line"""
  def format(self, record):
    log_record = {
      "timestamp": datetime.now(timezone.utc).isoformat(),
      "level": record.levelname,
      "logger": record.name,
      "message": record.getMessage(),
      "file": record.pathname,
      "line": record.lineno,
      "function": record.funcName
    }

    if record.exc_info:
      log_record["exception"] = self.formatException(record.exc_info)

    return json.dumps(log_record)


json_formatter = JsonFormatter()


def configure_logging():
  env = get_app_env()
  log_dir = get_log_dir()
  app_log_file = os.path.join(log_dir, "app.log")
  test_log_file = os.path.join(log_dir, "test.log")

  os.makedirs(log_dir, exist_ok=True)

  logger = logging.getLogger()
  if env in ("testing", "development"):
    logger.setLevel(logging.DEBUG)
  else: # production
    logger.setLevel(logging.INFO)

  # Reconfiguring must not stack handlers
  if logger.hasHandlers():
    logger.handlers.clear()

  # --- Console (stdout): errors only ---
  console_handler = logging.StreamHandler(sys.stdout)
  console_handler.setFormatter(json_formatter)
  console_handler.setLevel(logging.ERROR)
  logger.addHandler(console_handler)

  if env == "testing":
    file_handler = RotatingFileHandler(test_log_file, maxBytes=1*1024*1024, backupCount=1, encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
  else:
    file_handler = RotatingFileHandler(app_log_file, maxBytes=5*1024*1024, backupCount=3, encoding="utf-8")
    file_handler.setLevel(logging.INFO)
  file_handler.setFormatter(json_formatter)
  logger.addHandler(file_handler)


def get_logger(name):
  """
  Returns a logger object with specific name.
  configure_logging() should run once before the first record is emitted.
  """
  return logging.getLogger(name)
