"""
Job Portal - Main Application

FastAPI backend with:
- MongoDB for clients, delivery log and postings
- Email + SMS one-time codes for verification and login
- JWT session tokens

Run: uvicorn jobportal.main:app --reload
"""

import logging

from fastapi import FastAPI, Depends, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from jobportal.api.deps import get_client_store
from jobportal.api.routes import api_router
from jobportal.core.config import get_settings
from jobportal.core.errors import PortalError
from jobportal.core.logging_config import setup_logging
from jobportal.db.mongodb import init_mongo_indexes
from jobportal.services.stores import ClientStore

settings = get_settings()
setup_logging(settings.log_level)
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title="Job Portal",
    description="""
    Company registration and job posting API.

    ## Features
    - **Registration**: email + SMS one-time codes verify a new company
    - **Login**: passwordless, one code by email or SMS, returns a JWT
    - **Job postings**: verified companies post jobs and invite candidates
    - **Delivery log**: every email / SMS attempt is recorded
    """,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routes
app.include_router(api_router, prefix=settings.api_prefix)


# ============================================================
# ERROR HANDLERS
# Every failure leaves as {"success": false, "message": ...}
# ============================================================

@app.exception_handler(PortalError)
async def portal_error_handler(request: Request, exc: PortalError):
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": exc.message},
        headers=headers,
    )


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    problems = "; ".join(
        f"{'.'.join(str(p) for p in err['loc'] if p != 'body')}: {err['msg']}"
        for err in exc.errors()
    )
    return JSONResponse(
        status_code=400,
        content={"success": False, "message": f"Invalid request: {problems}"},
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content={"success": False, "message": f"Internal server error: {exc}"},
    )


# Startup event
@app.on_event("startup")
async def startup_event():
    """Create MongoDB indexes on startup (the unique ones guard registration)."""
    if settings.storage_backend != "mongo":
        logger.info("Using %s storage backend", settings.storage_backend)
        return
    init_mongo_indexes()


@app.get("/health", tags=["Health"])
def health_check(clients: ClientStore = Depends(get_client_store)):
    """Detailed health check."""
    connected = clients.ping()
    return {
        "success": connected,
        "status": "healthy" if connected else "degraded",
        "storage": settings.storage_backend,
    }
