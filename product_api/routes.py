# product_api/routes.py

from typing import Any, List

from fastapi import APIRouter, Depends, HTTPException

from product_api.body_parser import parse_body
from product_api.database import ProductRepository, get_repository
from product_api.models import Product, MessageResponse, ErrorResponse, parse_candidates, parse_update
import product_api.exceptions as ex
from product_api.logger import get_logger

log = get_logger(__name__)

NOT_FOUND_MESSAGE = "Product not found"

router = APIRouter(tags=["products"])


@router.get("", response_model=List[Product], response_model_exclude_none=True,
            responses={500: {"model": ErrorResponse}})
@router.get("/", response_model=List[Product], response_model_exclude_none=True, include_in_schema=False)
async def list_products(repository: ProductRepository = Depends(get_repository)):
  """Return every product in the store."""
  log.info("GET /products called")
  try:
    return await repository.list_products()
  except ex.BackendError as e:
    log.error(f"[API] Error retrieving products: {e}")
    raise HTTPException(status_code=500, detail="Failed to retrieve products")


@router.get("/{product_id}", response_model=Product, response_model_exclude_none=True,
            responses={404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}})
async def get_product(product_id: str, repository: ProductRepository = Depends(get_repository)):
  log.info(f"GET /products/{product_id} called")
  try:
    product = await repository.get_product(product_id)
  except ex.BackendError as e:
    log.error(f"[API] Error retrieving product '{product_id}': {e}")
    raise HTTPException(status_code=500, detail="Failed to retrieve product")

  if product is None:
    raise HTTPException(status_code=404, detail=NOT_FOUND_MESSAGE)
  return product


@router.post("", status_code=201, response_model=List[Product], response_model_exclude_none=True,
             responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}})
@router.post("/", status_code=201, response_model=List[Product], response_model_exclude_none=True, include_in_schema=False)
async def create_products(body: Any = Depends(parse_body),
                          repository: ProductRepository = Depends(get_repository)):
  """
  Bulk-create products from a non-empty JSON array.
  The whole batch is validated before the insert; one bad candidate rejects all.
  The insert itself is a single non-transactional batch.
  """
  try:
    candidates = parse_candidates(body)
  except ex.PayloadValidationError as e:
    log.info(f"[API] Rejected product batch: {e.message} {e.errors}")
    raise HTTPException(status_code=400, detail=e.message)

  log.info(f"POST /products called with {len(candidates)} candidate(s)")
  try:
    return await repository.insert_products([c.to_document() for c in candidates])
  except ex.BackendError as e:
    log.error(f"[API] Error creating products: {e}")
    raise HTTPException(status_code=500, detail="Failed to create products")


@router.put("/{product_id}", response_model=Product, response_model_exclude_none=True,
            responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}})
async def update_product(product_id: str, body: Any = Depends(parse_body),
                         repository: ProductRepository = Depends(get_repository)):
  """Full replacement of name, description, price and imageUrl."""
  try:
    update = parse_update(body)
  except ex.PayloadValidationError as e:
    log.info(f"[API] Rejected update for '{product_id}': {e.message}")
    raise HTTPException(status_code=400, detail=e.message)

  log.info(f"PUT /products/{product_id} called")
  try:
    product = await repository.replace_product(product_id, update.to_document())
  except ex.BackendError as e:
    log.error(f"[API] Error updating product '{product_id}': {e}")
    raise HTTPException(status_code=500, detail="Failed to update product")

  if product is None:
    raise HTTPException(status_code=404, detail=NOT_FOUND_MESSAGE)
  return product


@router.delete("/{product_id}", response_model=MessageResponse,
               responses={404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}})
async def delete_product(product_id: str, repository: ProductRepository = Depends(get_repository)):
  log.info(f"DELETE /products/{product_id} called")
  try:
    deleted = await repository.delete_product(product_id)
  except ex.BackendError as e:
    log.error(f"[API] Error deleting product '{product_id}': {e}")
    raise HTTPException(status_code=500, detail="Failed to delete product")

  if deleted is None:
    raise HTTPException(status_code=404, detail=NOT_FOUND_MESSAGE)
  return {"message": "Product deleted successfully"}
