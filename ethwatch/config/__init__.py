"""Configuration module for ethwatch."""

from ethwatch.config.loader import load_config, get_config_path
from ethwatch.config.schema import Config
from ethwatch.config.access import get_config, clear_config_cache

__all__ = ["Config", "load_config", "get_config_path", "get_config", "clear_config_cache"]
