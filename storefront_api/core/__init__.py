"""
Core utilities for Storefront API.

This package provides core functionality including logging configuration,
the JSON file storage layer, I/O models and other shared utilities.
"""

from storefront_api.core.logging_config import get_logger, setup_logging

__all__ = ["get_logger", "setup_logging"]
