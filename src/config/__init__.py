"""
Configuration module for the size advisor.

This module provides centralized configuration management using pydantic-settings,
plus the static defaults (size charts, form limits) and the UI translations.

Usage:
    from config import get_settings

    settings = get_settings()
    model = settings.analysis_model
    is_dev = settings.is_development
"""

from config.settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
