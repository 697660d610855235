# Configuration package
"""
Configuration package for the Soul Shakti Wellness API
Exports the settings factory from settings.py for easy import
"""
from .settings import Settings, get_settings, validate_settings

__all__ = ["Settings", "get_settings", "validate_settings"]
