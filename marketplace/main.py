import logging
from contextlib import asynccontextmanager
from urllib.parse import urlparse

from fastapi import FastAPI
from starlette.middleware.cors import CORSMiddleware

from marketplace.api.exception_handlers import register_exception_handlers
from marketplace.api.v1.router import api_router
from marketplace.core.config import settings
from marketplace.core.logging import configure_logging
from marketplace.db import SessionLocal
from marketplace.services.auth import cleanup_expired_tokens

configure_logging(settings.log_level)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    db = SessionLocal()
    try:
        cleanup_expired_tokens(db)
    finally:
        db.close()
    logger.info("Marketplace API started")
    yield


app = FastAPI(title="Marketplace API", lifespan=lifespan)

if settings.frontend_url:
    parsed = urlparse(settings.frontend_url)
    origin = f"{parsed.scheme}://{parsed.netloc}"
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[origin],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

register_exception_handlers(app)
app.include_router(api_router, prefix="/api/v1")


@app.get("/health")
def health():
    return {"status": "ok"}
