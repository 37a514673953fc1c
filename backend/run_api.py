#!/usr/bin/env python
"""
Run the Jotter API server.

Usage:
    python run_api.py
    python run_api.py --reload  # Development mode
    python run_api.py --port 9000
"""

import argparse
import uvicorn

from shared.config import get_settings


def main():
    settings = get_settings()

    parser = argparse.ArgumentParser(description=f"Run the {settings.app_name} server")
    parser.add_argument("--reload", action="store_true", help="Restart on code changes")
    parser.add_argument("--host", type=str, default=settings.host, help="Host to bind to")
    parser.add_argument("--port", type=int, default=settings.port, help="Port to bind to")
    args = parser.parse_args()

    if not settings.jwt_secret:
        parser.error("JWT_SECRET must be set before starting the server")

    uvicorn.run(
        "api:app",
        host=args.host,
        port=args.port,
        reload=args.reload or settings.reload,
        log_level="debug" if settings.debug else "info",
    )


if __name__ == "__main__":
    main()
