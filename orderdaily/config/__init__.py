"""YAML configuration loading for the Orderdaily client."""

from .loader import expand_env, load_config, read_settings

__all__ = ["expand_env", "load_config", "read_settings"]
