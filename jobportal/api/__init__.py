"""
API module - FastAPI routers, endpoint definitions and dependency wiring.

Usage:
    from jobportal.api.routes import api_router
    app.include_router(api_router)
"""
