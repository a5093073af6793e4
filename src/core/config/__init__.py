"""
Configuration subsystem for Alchemy Table.

Static settings are read from environment variables (with .env support)
once at import time. Game content is not configuration; it lives in the
YAML content packs loaded by ``src.modules.content``.

Usage
-----
    from src.core.config import Config

    if Config.is_production():
        ...
    content_dir = Config.CONTENT_DIR
"""

from src.core.config.config import Config, Environment

__all__ = [
    "Config",
    "Environment",
]
