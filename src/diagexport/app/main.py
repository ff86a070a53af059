"""
FastAPI Application Entry Point
================================

Main application initialization and wiring.
Run with: uvicorn diagexport.app.main:app --reload
"""

# Load environment variables FIRST, before any other imports
from dotenv import load_dotenv
load_dotenv()

import logging

from fastapi import FastAPI

from diagexport.api.routes import router
from diagexport.app.config import VERSION, APP_NAME, LOG_LEVEL
from diagexport.app.exceptions import global_exception_handler


# =============================================================================
# LOGGING
# =============================================================================

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


# =============================================================================
# APP INITIALIZATION
# =============================================================================

app = FastAPI(
    title=APP_NAME,
    description="Diagnostic query result export API",
    version=VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
)


# =============================================================================
# EXCEPTION HANDLERS
# =============================================================================

app.add_exception_handler(Exception, global_exception_handler)


# =============================================================================
# ROUTES
# =============================================================================

app.include_router(router, tags=["Diagnostics"])


# =============================================================================
# ROOT
# =============================================================================

@app.get("/")
def root():
    """Root endpoint with API information."""
    return {
        "name": APP_NAME,
        "version": VERSION,
        "docs": "/docs",
        "health": "/health",
        "endpoints": {
            "export": "POST /diagnostics/export"
        }
    }
