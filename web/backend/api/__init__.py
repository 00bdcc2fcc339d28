"""API routes for the KDP export service"""

from web.backend.api import export_api

__all__ = ["export_api"]
