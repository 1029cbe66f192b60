# tests/conftest.py

import os

os.environ.setdefault("APP_ENV", "testing")

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient

from product_api.database import get_repository
from product_api.exceptions import BackendError
from product_api.main import app


class FakeProductRepository:
  """In-memory stand-in for ProductRepository"""

  def __init__(self):
    self.documents = {}
    self.error = None

  def fail_with(self, error):
    self.error = error

  def fail_backend(self):
    self.error = "backend"

  def _maybe_fail(self, operation):
    if self.error == "backend":
      raise BackendError(operation, RuntimeError("connection reset"))
    if self.error is not None:
      raise self.error

  async def list_products(self):
    self._maybe_fail("list products")
    return [dict(doc) for doc in self.documents.values()]

  async def get_product(self, product_id):
    self._maybe_fail("get product")
    doc = self.documents.get(product_id)
    return dict(doc) if doc else None

  async def insert_products(self, documents):
    self._maybe_fail("insert products")
    inserted = []
    for document in documents:
      doc = {"_id": str(ObjectId()), **document}
      self.documents[doc["_id"]] = doc
      inserted.append(dict(doc))
    return inserted

  async def replace_product(self, product_id, fields):
    self._maybe_fail("update product")
    if product_id not in self.documents:
      return None
    doc = {"_id": product_id, **fields}
    self.documents[product_id] = doc
    return dict(doc)

  async def delete_product(self, product_id):
    self._maybe_fail("delete product")
    return self.documents.pop(product_id, None)


@pytest.fixture
def repository():
  repo = FakeProductRepository()
  app.dependency_overrides[get_repository] = lambda: repo
  yield repo
  app.dependency_overrides.clear()


@pytest.fixture
def client(repository):
  return TestClient(app, raise_server_exceptions=False)
