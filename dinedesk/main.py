"""Main FastAPI application."""
from fastapi import FastAPI
from contextlib import asynccontextmanager

from dinedesk.core.logging import setup_logging
from dinedesk.db.database import init_db
from dinedesk.api import health, restaurant, checkout, orders, vouchers, zones


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    # Startup
    setup_logging()
    await init_db()
    yield


app = FastAPI(
    title="DineDesk Checkout",
    description="Multi-tenant restaurant ordering and checkout API",
    version="0.1.0",
    lifespan=lifespan,
)

app.include_router(health.router, tags=["health"])
app.include_router(restaurant.router, tags=["restaurant"])
app.include_router(checkout.router, tags=["checkout"])
app.include_router(orders.router, tags=["orders"])
app.include_router(vouchers.router, tags=["vouchers"])
app.include_router(zones.router, tags=["zones"])


@app.get("/")
async def root():
    """Service banner."""
    return {
        "message": "DineDesk Checkout API",
        "version": "0.1.0",
    }
