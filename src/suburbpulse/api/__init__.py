"""
Flask REST API for suburb market statistics.

Provides endpoints for:
- Suburb rankings, search and detail
- Outlier detection and prediction feature tables
- Rebuilding suburb statistics
"""

from suburbpulse.api.server import create_app
from suburbpulse.api.routes import register_routes

__all__ = [
    "create_app",
    "register_routes",
]
