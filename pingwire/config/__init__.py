"""Configuration module for pingwire."""

from pingwire.config.loader import load_config, get_config_path
from pingwire.config.schema import Config

__all__ = ["Config", "load_config", "get_config_path"]
