"""Tools infrastructure package."""

from .registry import DefaultToolRegistry, PluginToolAdapter

__all__ = ['DefaultToolRegistry', 'PluginToolAdapter']
