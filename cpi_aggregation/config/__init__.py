"""Configuration module for CPI aggregation."""

from .constants import *
from .settings import Settings, get_default_settings

__all__ = ["Settings", "get_default_settings"]
