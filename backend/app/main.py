"""FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import CORS_ORIGINS
from .routers import results, upload
from .services.results import init_store, close_store


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifespan (startup and shutdown)."""
    # Startup
    init_store()
    yield
    # Shutdown
    close_store()


app = FastAPI(
    title="PEI Election Results API",
    description="API for 2019 PEI provincial election poll results",
    version="1.0.0",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register routers
app.include_router(results.router)
app.include_router(upload.router)


@app.get("/")
async def root():
    """API root endpoint."""
    return {
        "name": "PEI Election Results API",
        "version": "1.0.0",
        "endpoints": {
            "districts": "/api/districts",
            "polls": "/api/districts/{district}/polls",
            "reports": "/api/reports/{winners|runner-ups|green}",
            "upload": "/api/upload"
        }
    }


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}
