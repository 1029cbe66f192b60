# product_api/models.py

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from typing import Any, List, Optional

from product_api.exceptions import PayloadValidationError

BULK_BODY_MESSAGE = "Request body must be an array of products"
BULK_FIELDS_MESSAGE = "Name, description, and price are required for each product"
UPDATE_FIELDS_MESSAGE = "Name, description, and price are required"


class ProductFields(BaseModel):
  """Client-supplied product fields, shared by create and update bodies"""
  # Unknown keys are dropped, never persisted
  model_config = ConfigDict(extra="ignore")

  name: str
  description: str
  price: float
  imageUrl: Optional[str] = None

  @field_validator("name", "description")
  @classmethod
  def not_empty(cls, value: str) -> str:
    if not value:
      raise ValueError("must not be empty")
    return value

  @field_validator("price")
  @classmethod
  def not_zero(cls, value: float) -> float:
    if not value:
      raise ValueError("must be a non-zero number")
    return value

  def to_document(self) -> dict:
    return self.model_dump(exclude_none=True)


class ProductCreate(ProductFields):
  pass


class ProductUpdate(ProductFields):
  pass


class Product(BaseModel):
  """Persisted product as returned to clients"""
  model_config = ConfigDict(populate_by_name=True)

  id: str = Field(alias="_id")
  name: str
  description: str
  price: float
  imageUrl: Optional[str] = None


class MessageResponse(BaseModel):
  message: str


class ErrorResponse(BaseModel):
  error: str


def parse_candidates(body: Any) -> List[ProductCreate]:
  """
  Validate a bulk-create body as a whole before anything is inserted.

  Args:
    body: decoded request body, expected to be a non-empty list of objects

  Returns:
    List[ProductCreate]: one validated candidate per input item, same order

  Raises:
    PayloadValidationError: body is not a non-empty list, or any item is invalid
  """
  if not isinstance(body, list) or len(body) == 0:
    raise PayloadValidationError(BULK_BODY_MESSAGE)

  candidates = []
  for index, item in enumerate(body):
    if not isinstance(item, dict):
      raise PayloadValidationError(BULK_FIELDS_MESSAGE, errors=[{"index": index, "msg": "not an object"}])
    try:
      candidates.append(ProductCreate.model_validate(item))
    except ValidationError as e:
      raise PayloadValidationError(BULK_FIELDS_MESSAGE, errors=[{"index": index, "msg": str(e)}]) from e
  return candidates


def parse_update(body: Any) -> ProductUpdate:
  """Validate a full-replacement update body"""
  if not isinstance(body, dict):
    raise PayloadValidationError(UPDATE_FIELDS_MESSAGE)
  try:
    return ProductUpdate.model_validate(body)
  except ValidationError as e:
    raise PayloadValidationError(UPDATE_FIELDS_MESSAGE, errors=[{"msg": str(e)}]) from e
