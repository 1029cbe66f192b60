# product_api/database.py

from typing import List, Optional

from bson import ObjectId
from fastapi import Request
from pymongo import AsyncMongoClient, ReturnDocument
from pymongo.errors import PyMongoError

from product_api.config import get_mongodb_uri, get_mongodb_db, get_mongodb_timeout_ms
from product_api.exceptions import BackendError
from product_api.logger import get_logger

log = get_logger(__name__)

# Used when neither MONGODB_DB nor the URI names a database
DEFAULT_DATABASE = "test"
PRODUCTS_COLLECTION = "products"


def mask_uri(uri: Optional[str]) -> str:
  """Hide the password part of a connection string for logging"""
  if not uri or "://" not in uri:
    return str(uri)
  scheme, rest = uri.split("://", 1)
  if "@" not in rest:
    return uri
  creds, tail = rest.rsplit("@", 1)
  user = creds.split(":", 1)[0]
  return f"{scheme}://{user}:***@{tail}"


def to_object_id(product_id: str):
  """
  Lookup key for a path identifier. Valid ObjectId strings are converted,
  anything else is used verbatim and simply matches nothing.
  """
  if ObjectId.is_valid(product_id):
    return ObjectId(product_id)
  return product_id


def _serialize(document: Optional[dict]) -> Optional[dict]:
  if document is None:
    return None
  document = dict(document)
  document["_id"] = str(document["_id"])
  return document


class ProductRepository:
  """Product operations on the shared connection, one round trip each"""

  def __init__(self, client, collection):
    self.client = client
    self.collection = collection

  async def list_products(self) -> List[dict]:
    try:
      documents = await self.collection.find({}).to_list()
    except PyMongoError as e:
      raise BackendError("list products", e) from e
    return [_serialize(doc) for doc in documents]

  async def get_product(self, product_id: str) -> Optional[dict]:
    try:
      document = await self.collection.find_one({"_id": to_object_id(product_id)})
    except PyMongoError as e:
      raise BackendError("get product", e) from e
    return _serialize(document)

  async def insert_products(self, documents: List[dict]) -> List[dict]:
    """
    Insert all documents in one ordered batch.
    Not transactional: a failure mid-batch can leave earlier documents persisted.
    """
    documents = [dict(doc) for doc in documents]
    try:
      result = await self.collection.insert_many(documents)
    except PyMongoError as e:
      raise BackendError("insert products", e) from e

    inserted = []
    for document, inserted_id in zip(documents, result.inserted_ids):
      document["_id"] = inserted_id
      inserted.append(_serialize(document))
    return inserted

  async def replace_product(self, product_id: str, fields: dict) -> Optional[dict]:
    """Overwrite name, description, price and imageUrl; imageUrl is removed when absent"""
    update = {"$set": dict(fields)}
    if "imageUrl" not in fields:
      update["$unset"] = {"imageUrl": ""}

    try:
      document = await self.collection.find_one_and_update(
        {"_id": to_object_id(product_id)},
        update,
        return_document=ReturnDocument.AFTER
      )
    except PyMongoError as e:
      raise BackendError("update product", e) from e
    return _serialize(document)

  async def delete_product(self, product_id: str) -> Optional[dict]:
    try:
      document = await self.collection.find_one_and_delete({"_id": to_object_id(product_id)})
    except PyMongoError as e:
      raise BackendError("delete product", e) from e
    return _serialize(document)


async def connect(uri: str = None, database_name: str = None, timeout_ms: int = None) -> ProductRepository:
  """
  Open the single process-wide connection and verify it with a ping.
  Any failure is fatal: it is logged and the process exits with status 1.
  """
  uri = uri if uri is not None else get_mongodb_uri()
  database_name = database_name or get_mongodb_db()
  timeout_ms = timeout_ms if timeout_ms is not None else get_mongodb_timeout_ms()

  log.info(f"Attempting to connect to MongoDB at {mask_uri(uri)}")
  try:
    if not uri:
      raise ValueError("MONGODB_URI is not set")
    client = AsyncMongoClient(uri, serverSelectionTimeoutMS=timeout_ms)
    await client.admin.command("ping")
    if database_name:
      database = client[database_name]
    else:
      database = client.get_default_database(default=DEFAULT_DATABASE)
  except Exception as e:
    log.error(f"Error connecting to MongoDB: {e}", exc_info=True)
    raise SystemExit(1)

  log.info(f"Connected to MongoDB database '{database.name}'")
  return ProductRepository(client, database[PRODUCTS_COLLECTION])


async def close(repository: ProductRepository):
  await repository.client.close()
  log.info("Closed MongoDB connection")


def get_repository(request: Request) -> ProductRepository:
  """FastAPI dependency returning the repository created at startup"""
  return request.app.state.repository
