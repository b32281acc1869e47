"""
HTTP middleware.
"""

from urbannest.middleware.request_logging import RequestLoggingMiddleware

__all__ = ["RequestLoggingMiddleware"]
