"""Configuration module for the S&S Activewear catalog bridge."""

from ss_activewear.config.settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
