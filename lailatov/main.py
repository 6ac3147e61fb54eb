"""FastAPI app - lifespan, CORS, router registration."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
import logging
from .api.auth import router as auth_router
from .api.babies import router as babies_router
from .api.parents import router as parents_router
from .api.export import router as export_router
from .core.store import get_repository
from .core.settings import settings
from .db.seed_demo_data import seed_demo_data

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

logger = logging.getLogger(__name__)


# Used by: FastAPI lifespan - seed the in-memory store on startup
@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.SEED_DEMO_DATA:
        seed_demo_data(get_repository())
    else:
        logger.info("Demo seed disabled, starting with an empty store")

    yield

    logger.info("Shutting down, in-memory data is discarded")


app = FastAPI(
    title="Laila Tov API",
    version="1.0.0",
    description="Laila Tov - Baby Sleep Coaching API",
    lifespan=lifespan
)

cors_origins = settings.CORS_ORIGINS.copy()
if settings.CORS_EXTRA_ORIGINS:
    cors_origins.extend([o.strip() for o in settings.CORS_EXTRA_ORIGINS.split(",") if o.strip()])

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth_router)
app.include_router(babies_router)
app.include_router(parents_router)
app.include_router(export_router)


@app.get("/", tags=["root"])
async def read_root():
    return {"status": "Laila Tov API is up"}


# Used by: `lailatov` console script
def run():
    import uvicorn

    uvicorn.run("lailatov.main:app", host=settings.HOST, port=settings.PORT, log_level=settings.LOG_LEVEL.lower())
