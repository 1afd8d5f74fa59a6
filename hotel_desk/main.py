"""Hotel Desk — FastAPI application entry point."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from hotel_desk.api.v1.bookings import router as bookings_router
from hotel_desk.api.v1.calendar import router as calendar_router
from hotel_desk.api.v1.dashboard import router as dashboard_router
from hotel_desk.api.v1.guests import router as guests_router
from hotel_desk.api.v1.rooms import router as rooms_router
from hotel_desk.config import settings

# Configure root logger so all hotel_desk.* loggers output to stderr.
logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan handler for startup and shutdown events."""
    # Startup
    yield
    # Shutdown: dispose engine connections
    from hotel_desk.database import engine

    await engine.dispose()


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="Front-desk backend for a hotel: rooms, guests, bookings and the booking calendar.",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routers
app.include_router(rooms_router)
app.include_router(guests_router)
app.include_router(bookings_router)
app.include_router(calendar_router)
app.include_router(dashboard_router)


@app.get("/health", tags=["health"])
async def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy", "service": settings.app_name}


@app.get("/", tags=["root"])
async def root() -> dict[str, str]:
    """Root endpoint."""
    return {
        "service": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs",
    }
