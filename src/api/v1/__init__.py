"""
API v1 package.

Contains versioned JSON routes for the registration service.
"""

from src.api.v1.routes import router

__all__ = ["router"]
