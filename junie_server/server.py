#!/usr/bin/env python3
"""
Junie API server entrypoint.

    python -m junie_server.server
    uvicorn junie_server.server:app --reload --port 8000
"""

import uvicorn

from .app import create_app
from .config import get_config

app = create_app()


def main() -> None:
    config = get_config()
    uvicorn.run(app, host=config.host, port=config.port, log_level=config.log_level.lower())


if __name__ == "__main__":
    main()
