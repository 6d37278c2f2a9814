"""
Configuration management for the Backend Tourist Safety engine.

Loads settings from environment variables and an optional .env file.
Exposes a single source of truth for service configuration.
"""

from backend_touristsafety.config.settings import Settings, get_settings  # noqa: F401

__all__ = ["Settings", "get_settings"]
