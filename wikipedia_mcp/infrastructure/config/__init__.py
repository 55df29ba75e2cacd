"""Configuration package."""

from .settings import AppSettings, ServerSettings, WikipediaSettings, get_settings, reload_settings

__all__ = ['AppSettings', 'ServerSettings', 'WikipediaSettings', 'get_settings', 'reload_settings']
