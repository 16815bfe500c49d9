"""Loader configuration schema and sources."""

from .schema import LoaderConfig
from .loader import load_loader_config

__all__ = [
    "LoaderConfig",
    "load_loader_config",
]
