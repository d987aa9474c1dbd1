"""
Utility module for the CMIS Admin Console API
"""

from .custom_logger import configure_service_logging, setup_logger

__all__ = [
    "configure_service_logging",
    "setup_logger",
]
