"""
Main FastAPI application
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from waveorder.config import get_settings
from waveorder.database import engine, Base
from waveorder import models  # noqa: F401 - register tables on Base.metadata
from waveorder.errors import register_exception_handlers
from waveorder.api import storefront
from waveorder.utils.logger import get_logger

settings = get_settings()
logger = get_logger("waveorder")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Create all tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables created")

    yield

    await engine.dispose()

app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    debug=settings.DEBUG,
    lifespan=lifespan,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Include routers
app.include_router(storefront.router, prefix="/api/storefront", tags=["Storefront"])


@app.get("/")
async def root():
    return {
        "app": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "status": "running"
    }


@app.get("/health")
async def health_check():
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "waveorder.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG
    )
