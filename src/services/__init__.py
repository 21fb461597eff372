"""
Services Package

Contains the client facade exposed to the hosting application.
"""

from services.client_service import AuthClient, create_client, get_client

__all__ = [
    "AuthClient",
    "create_client",
    "get_client",
]
