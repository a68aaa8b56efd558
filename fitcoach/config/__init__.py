"""
Configuration modules for fitcoach.
"""

from .logging import configure_structured_logging, get_logger, setup_logging
from .settings import DecoderSettings, get_settings

__all__ = [
    "configure_structured_logging",
    "get_logger",
    "setup_logging",
    "DecoderSettings",
    "get_settings",
]
