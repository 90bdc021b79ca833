import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from microgreens.api.router import api_router
from microgreens.config.settings import settings
from microgreens.repositories import SqlVariedadRepository
from microgreens.services.variedad_service import seed_predefined
from microgreens.utils.db import SessionLocal, init_db
from microgreens.utils.errors import install_error_handlers

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    if settings.SEED_VARIETIES:
        db = SessionLocal()
        try:
            seed_predefined(SqlVariedadRepository(db))
        finally:
            db.close()
    logger.info("MicroGreens API lista (APP_TZ=%s)", settings.APP_TZ)
    yield


app = FastAPI(
    title="MicroGreens API",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

install_error_handlers(app)
app.include_router(api_router)

@app.get("/health", tags=["health"])
def health():
    return {"status": "ok"}
