"""Configuration management for the batch translator.

Usage:
    >>> from batch_translator.config import get_settings
    >>> settings = get_settings()
    >>> print(settings.metrics_base_name)
"""

from batch_translator.config.settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
