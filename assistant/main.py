"""FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from assistant.config import settings
from assistant.database import create_db_and_tables
from assistant.utils.logging import setup_logging
from assistant.api import chat, summary, system


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    setup_logging()
    create_db_and_tables()
    yield


app = FastAPI(
    title="Trading Assistant",
    description="Conversational assistant over a user's trading sessions and trades",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["POST", "OPTIONS", "GET"],
    allow_headers=["authorization", "x-client-info", "apikey", "content-type"],
)

# Mount routers
app.include_router(chat.router)
app.include_router(summary.router)
app.include_router(system.router)
