"""
API v1 package.

This package contains all API endpoints for version 1 of the API.
"""
from .endpoints import router

__all__ = ['router']
