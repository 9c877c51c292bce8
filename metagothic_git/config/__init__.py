"""Configuration for the application."""

from .settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
