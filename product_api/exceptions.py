# product_api/exceptions.py

class ProductApiError(Exception):
  """All product API errors"""
  pass

class PayloadValidationError(ProductApiError):
  """Malformed or incomplete client input (400)"""
  def __init__(self, message: str, errors: list = None):
    self.message = message
    self.errors = errors or []
    super().__init__(self.message)

class BackendError(ProductApiError):
  """Any failure from the database layer (500)"""
  def __init__(self, operation: str, cause: Exception = None):
    self.operation = operation
    self.cause = cause
    message = f"Database error during {operation}"
    if cause is not None:
      message = f"{message}: {cause}"
    super().__init__(message)
