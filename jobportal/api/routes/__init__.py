"""
API Routes - Combines all route modules into single router.
"""

from fastapi import APIRouter

from jobportal.api.routes.auth_routes import router as auth_router
from jobportal.api.routes.verification_routes import router as verification_router
from jobportal.api.routes.job_routes import router as job_router
from jobportal.api.routes.log_routes import router as log_router

# Main API router
api_router = APIRouter()

# Include all sub-routers
api_router.include_router(auth_router)
api_router.include_router(verification_router)
api_router.include_router(job_router)
api_router.include_router(log_router)
