import logging
from contextlib import asynccontextmanager

from fastapi import APIRouter, FastAPI, Request
from fastapi.responses import JSONResponse

from restaurant_pos.api import health
from restaurant_pos.api.routes import auth, kitchen, menu, orders, payments, reports, staff, tables
from restaurant_pos.config import settings
from restaurant_pos.db.base import Base
from restaurant_pos.db.session import AsyncSessionLocal, engine
from restaurant_pos.db.seed import seed_sample_data
from restaurant_pos.errors import PosError, SessionError

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.CREATE_TABLES_ON_STARTUP:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
    if settings.SEED_SAMPLE_DATA:
        async with AsyncSessionLocal() as session:
            await seed_sample_data(session)
    logger.info("Application started")
    yield
    logger.info("Application stopped")


app = FastAPI(title="Restaurant POS", lifespan=lifespan)


@app.exception_handler(PosError)
async def pos_error_handler(request: Request, exc: PosError):
    logger.warning("%s %s -> %s: %s", request.method, request.url.path, exc.status_code, exc.message)
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, SessionError) else None
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message}, headers=headers)


# Подключаем роуты
api = APIRouter(prefix="/api")
for module in (auth, tables, menu, orders, kitchen, staff, payments, reports):
    api.include_router(module.router)

app.include_router(health.router)
app.include_router(api)
