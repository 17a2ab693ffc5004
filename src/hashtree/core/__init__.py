"""
hashtree - Core Configuration and Logging
"""

from hashtree.core.algorithms import HashAlgorithm
from hashtree.core.config import Settings, get_settings, settings
from hashtree.core.logging import setup_logging

__all__ = [
    "HashAlgorithm",
    "Settings",
    "get_settings",
    "settings",
    "setup_logging",
]
