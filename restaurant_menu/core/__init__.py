"""
Core module initialization.
Exports configuration, logging and error utilities.
"""

from restaurant_menu.core.config import get_settings, Settings, EnvironmentMode
from restaurant_menu.core.errors import AppError, ErrorCode

__all__ = ["get_settings", "Settings", "EnvironmentMode", "AppError", "ErrorCode"]
