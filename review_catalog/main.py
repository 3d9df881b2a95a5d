import logging

from fastapi import FastAPI

from contextlib import asynccontextmanager
from review_catalog.clients.servicedb import get_client, close_client

from review_catalog.core.logger import setup_json_logging, shutdown_logging
from review_catalog.core.sentry import init_sentry
from review_catalog.core.config import settings
from review_catalog.core.middleware import RequestContextMiddleware

from review_catalog.api.handlers import register_exception_handlers
from review_catalog.api.v1.reviews import router as reviews_router
from review_catalog.api.v1.debug import include_debug_routes


@asynccontextmanager
async def lifespan(app: FastAPI):
    # logging first, everything after it logs as JSON
    setup_json_logging(service=settings.app_name)
    init_sentry(settings.sentry_dsn, environment=settings.env)

    await get_client()

    try:
        yield
    finally:
        await close_client()
        shutdown_logging()


app = FastAPI(title="Review Catalog Service",
              description="API for managing reviews, ratings, "
                          "and likes/dislikes",
              lifespan=lifespan)

app.add_middleware(RequestContextMiddleware)

# RequestContextMiddleware already writes access records
logging.getLogger("uvicorn.access").setLevel("WARNING")

register_exception_handlers(app)
include_debug_routes(app)


@app.get("/health")
def health():
    return {"status": "ok"}


app.include_router(reviews_router)
