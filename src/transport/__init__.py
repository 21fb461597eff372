"""
Transport Package

HTTP access to the authentication API with bearer-token rotation.
"""

from .cookie import SessionCookie
from .http_client import AUTH_TOKEN_HEADER, HttpClient, Response

__all__ = [
    "AUTH_TOKEN_HEADER",
    "HttpClient",
    "Response",
    "SessionCookie",
]
