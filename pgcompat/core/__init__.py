"""
Core Components

Configuration.
"""

from pgcompat.core.config import Settings, get_settings

__all__ = [
    "Settings",
    "get_settings",
]
