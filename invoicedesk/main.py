"""FastAPI application entry point."""
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from invoicedesk.config import settings
from invoicedesk.database import database
from invoicedesk.errors import ProviderError, field_errors
from invoicedesk.logging_config import configure_logging
from invoicedesk.routers import clients, dashboard, invoices, time_entries


logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan - startup and shutdown events."""
    # Startup
    configure_logging(settings.log_level, debug=settings.debug)
    await database.connect()
    yield
    # Shutdown
    await database.disconnect()


app = FastAPI(
    title="InvoiceDesk API",
    description="Backend API for invoicing and time tracking",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(clients.router)
app.include_router(invoices.router)
app.include_router(time_entries.router)
app.include_router(dashboard.router)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Report malformed request bodies as 400 with per-field errors."""
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": field_errors(exc.errors())},
    )


@app.exception_handler(ProviderError)
async def provider_error_handler(request: Request, exc: ProviderError):
    """Storage failures surface as 500 without leaking driver details."""
    logger.error("provider_error", path=request.url.path, error=str(exc))
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


@app.get("/")
async def root():
    """Root endpoint - health check."""
    return {"status": "ok", "message": "InvoiceDesk API"}


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}
