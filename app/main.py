import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from app.database import dispose_engine
from app.errors import register_exception_handlers
from app.logging_config import configure_logging
from app.middleware import TimingMiddleware
from app.routers import posts
from app.config import settings

configure_logging()
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: the pool opens connections lazily on first checkout.
    logger.info("Blog API starting (env=%s)", settings.APP_ENV)
    try:
        yield
    finally:
        # Shutdown
        await dispose_engine()

app = FastAPI(
    title="Blog API",
    description="Blog posts, likes and comments over a relational store",
    version="1.0.0",
    lifespan=lifespan,
)

register_exception_handlers(app)

# Middleware
app.add_middleware(TimingMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routers
app.include_router(posts.router)

@app.get("/health")
async def health():
    return {"status": "healthy", "version": "1.0.0"}
