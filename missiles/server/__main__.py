# missiles/server/__main__.py
"""Entry point: python -m missiles.server"""

from __future__ import annotations

import argparse
import asyncio
import signal
from pathlib import Path
from typing import TYPE_CHECKING

import uvicorn

from .config import settings

if TYPE_CHECKING:
    from fastapi import FastAPI


async def run_server(app: FastAPI, host: str, port: int) -> None:
    """Run the server with proper shutdown handling."""
    config = uvicorn.Config(app, host=host, port=port)
    server = uvicorn.Server(config)

    loop = asyncio.get_running_loop()

    def handle_exit():
        server.should_exit = True

    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, handle_exit)

    await server.serve()


def main() -> None:
    parser = argparse.ArgumentParser(description="Missiles Console Server")
    parser.add_argument("--host", type=str, default=settings.HOST)
    parser.add_argument("--port", type=int, default=settings.PORT)
    parser.add_argument(
        "--data-dir",
        type=Path,
        default=settings.DATA_DIR,
        help="Plugin data folder holding config.json",
    )
    parser.add_argument(
        "--no-tick",
        action="store_true",
        help="Do not run the tick loop; advance the clock with POST /tick",
    )
    args = parser.parse_args()

    from . import create_app

    app = create_app(data_dir=args.data_dir, tick_loop=not args.no_tick)
    asyncio.run(run_server(app, args.host, args.port))


if __name__ == "__main__":
    main()
