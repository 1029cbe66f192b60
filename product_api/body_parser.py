# product_api/body_parser.py

import json
from typing import Any

from fastapi import HTTPException, Request

from product_api.logger import get_logger

log = get_logger(__name__)

JSON_TYPE = "application/json"
FORM_TYPE = "application/x-www-form-urlencoded"


async def parse_body(request: Request) -> Any:
  """
  FastAPI dependency decoding JSON and URL-encoded request bodies.
  Other content types and empty bodies decode to None and are left
  to the handler's own shape checks.
  """
  content_type = request.headers.get("content-type", "").split(";")[0].strip().lower()

  if content_type == JSON_TYPE or content_type.endswith("+json"):
    raw = await request.body()
    if not raw.strip():
      return None
    try:
      return json.loads(raw)
    except (ValueError, RecursionError) as e:
      log.warning(f"Malformed JSON body on {request.method} {request.url.path}: {e}")
      raise HTTPException(status_code=400, detail="Malformed JSON body")

  if content_type == FORM_TYPE:
    form = await request.form()
    return {key: value for key, value in form.items()}

  return None
