"""
Junie path recommendation server

Usage: uvicorn junie_server.server:app --reload --port 8000
"""

from .app import create_app
from .config import ServerConfig, get_config, reload_config
from .state import AppState

__all__ = [
    "AppState",
    "ServerConfig",
    "create_app",
    "get_config",
    "reload_config",
]
