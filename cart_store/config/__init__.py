"""
Configuration management module for the cart store.

This module handles loading, validating, and managing YAML configuration files
using Pydantic for robust validation and type safety.
"""

from .config_manager import ConfigurationManager
from .models import CartConfig, DEFAULT_STORAGE_KEY

__all__ = ["ConfigurationManager", "CartConfig", "DEFAULT_STORAGE_KEY"]
