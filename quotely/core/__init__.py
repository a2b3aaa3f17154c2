"""
Core utilities and domain logic for Quotely.

This package provides logging configuration, the error taxonomy, database
access and the services that implement moderation and relationship rules.
"""

from quotely.core.logging_config import get_logger, setup_logging

__all__ = ["get_logger", "setup_logging"]
