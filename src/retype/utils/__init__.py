"""Utility modules for retype.

Provides:
- logger: get_logger for namespaced logging
"""

from retype.utils.logger import get_logger

__all__ = ["get_logger"]
