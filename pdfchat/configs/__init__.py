"""
Configuration management module.

Type-safe configuration built on Pydantic Settings. Every settings class
reads its values from the environment (and an optional .env file).
"""

from pdfchat.configs.settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
