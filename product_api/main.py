# product_api/main.py

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from contextlib import asynccontextmanager

from product_api.database import connect, close
from product_api.routes import router as products_router

from product_api.logger import configure_logging, get_logger
configure_logging()

log = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
  # Application startup: a failed connection exits the process
  app.state.repository = await connect()
  yield
  await close(app.state.repository)


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
  # Unsupported methods on known paths are treated like unknown routes
  if exc.status_code in (404, 405) and exc.detail in ("Not Found", "Method Not Allowed"):
    return JSONResponse(status_code=404, content={"error": "Not Found"})
  return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)}, headers=exc.headers)


async def global_exception_handler(request: Request, exc: Exception):
  log.error(f"Unhandled exception on {request.method} {request.url.path}: {exc}", exc_info=True)
  return JSONResponse(status_code=500, content={"error": "Internal Server Error"})


def create_app() -> FastAPI:
  app = FastAPI(title="Product Inventory API",
                lifespan=lifespan,
                description="CRUD API for products stored in MongoDB.",
                version="1.0.0")

  app.include_router(products_router, prefix="/products")

  @app.get("/health")
  def healthcheck():
    return {"status": "ok"}

  app.add_exception_handler(StarletteHTTPException, http_exception_handler)
  app.add_exception_handler(Exception, global_exception_handler)
  return app

app = create_app()
log.info("FastAPI application created")
