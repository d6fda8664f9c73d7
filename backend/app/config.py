"""
Application configuration.

The settings model lives in linear_gateway.config; the backend imports it
from here so the web layer has a single configuration entry point.
"""

from linear_gateway.config import Settings, get_settings

__all__ = ["Settings", "get_settings"]
