"""Configuration loading utilities for tilegraph."""

from .loader import ConfigLoader, ServiceConfig, load_config

__all__ = ["ConfigLoader", "ServiceConfig", "load_config"]
