"""
Middleware package for request logging
"""
from .request_logging import logging_middleware, subnet_of

__all__ = [
    "logging_middleware",
    "subnet_of",
]
