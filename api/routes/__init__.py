"""
API Routes Package

This module consolidates all routes for the Connect demo server. The static
catch-all is exported separately because it must be mounted last.
"""

from fastapi import APIRouter

from . import accounts
from . import checkout
from . import static
from . import transfers

# Create main router
router = APIRouter()

# Include all route modules
router.include_router(accounts.router, tags=["accounts"])
router.include_router(checkout.router, tags=["checkout"])
router.include_router(transfers.router, tags=["transfers"])

static_router = static.router

# Export for use in main application
__all__ = ["router", "static_router"]
