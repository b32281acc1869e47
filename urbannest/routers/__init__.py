"""
API routers.
"""

from urbannest.routers import auth, properties, enquiries, uploads

__all__ = ["auth", "properties", "enquiries", "uploads"]
