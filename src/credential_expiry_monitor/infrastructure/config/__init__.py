"""Configuration loading."""

from .settings import RUN_MODES, Settings, load_settings

__all__ = ["RUN_MODES", "Settings", "load_settings"]
