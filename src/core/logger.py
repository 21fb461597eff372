"""
Logging for the authentication client.

The client runs inside a host application, so it only touches its own
loggers. A root handler is installed only when the host has none, unless
`force` is given.
"""

import logging
import sys

# Top-level packages whose module loggers belong to the client
CLIENT_PACKAGES = ("core", "models", "state", "transport", "webauthn", "flows", "services")

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logging(level: str = "INFO", force: bool = False) -> None:
    """
    Configure client logging.

    Args:
        level: Level for the client loggers (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        force: Replace the host's root handlers instead of leaving them alone
    """
    logging.basicConfig(
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=force,
    )
    set_log_level(level)

    # Request lines would repeat what the transport already logs
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Logger for a client module (pass __name__)."""
    return logging.getLogger(name)


def set_log_level(level: str) -> None:
    """Change the level of the client loggers at runtime; unknown names mean INFO."""
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    for package in CLIENT_PACKAGES:
        logging.getLogger(package).setLevel(numeric_level)
