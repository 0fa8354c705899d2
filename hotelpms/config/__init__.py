"""
Configuration package for the hotel property management system.

Environment settings and logging setup.
"""

from hotelpms.config.settings import Settings, get_settings, settings

__all__ = ['Settings', 'get_settings', 'settings']
