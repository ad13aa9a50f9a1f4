"""
Authentication helpers for the Gateway service.
"""

from .bearer import BearerAuthenticator

__all__ = [
    "BearerAuthenticator",
]
