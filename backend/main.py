import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from api.dependencies import create_embedding_provider
from api.errors import fit_engine_exception_handler
from api.router import limiter, router
from config import settings
from services.errors import FitEngineError

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    provider = create_embedding_provider()
    app.state.embedding_provider = provider
    if settings.preload_embedding_model:
        await provider.warm_up()
    yield


app = FastAPI(
    title="Resume Fit Engine API",
    description="Semantic resume-job coverage and fit scoring",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_exception_handler(FitEngineError, fit_engine_exception_handler)

app.include_router(router)
