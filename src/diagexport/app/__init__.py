"""
App Module
==========

Configuration, exception mapping and FastAPI application initialization.
"""

from .config import VERSION, APP_NAME, OUTPUT_DIR, LOG_LEVEL, load_settings
from .exceptions import get_http_exception, global_exception_handler

__all__ = [
    "VERSION",
    "APP_NAME",
    "OUTPUT_DIR",
    "LOG_LEVEL",
    "load_settings",
    "get_http_exception",
    "global_exception_handler",
]
