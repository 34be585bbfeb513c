"""Configuration discovery and parsing helpers."""

from colgrid.lib.config.settings import ColgridConfig, config_path, load_config

__all__ = ["ColgridConfig", "config_path", "load_config"]
