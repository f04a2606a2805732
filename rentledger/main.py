"""RentLedger FastAPI application entry point."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from rentledger.api.v1.auth import router as auth_router
from rentledger.api.v1.bookings import router as bookings_router
from rentledger.api.v1.expenses import router as expenses_router
from rentledger.api.v1.guests import router as guests_router
from rentledger.api.v1.inquiries import contacts_router, inquiries_router
from rentledger.api.v1.properties import router as properties_router
from rentledger.api.v1.reports import router as reports_router
from rentledger.api.v1.units import router as units_router
from rentledger.config import settings

# Configure root logger so all rentledger.* loggers output to stderr.
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan handler for startup and shutdown events."""
    yield
    # Shutdown: dispose engine connections
    from rentledger.database import engine

    await engine.dispose()


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="Management backend for short-term rental properties: bookings, expenses and P&L.",
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
app.include_router(auth_router)
app.include_router(properties_router)
app.include_router(units_router)
app.include_router(guests_router)
app.include_router(bookings_router)
app.include_router(expenses_router)
app.include_router(reports_router)
app.include_router(contacts_router)
app.include_router(inquiries_router)


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
