"""File input and output."""

from simpeaks.io.config import generate_default_config, load_config, save_config

__all__ = ["generate_default_config", "load_config", "save_config"]
