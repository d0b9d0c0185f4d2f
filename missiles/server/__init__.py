# missiles/server/__init__.py
"""Missiles console server - runs the host tick loop and exposes a command console."""

from __future__ import annotations

import asyncio
import contextlib
import logging
import time
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI

from ..plugin import MissilesPlugin
from ..regions import RegionContainer
from ..sim.host import GameServer
from ..sim.world import BlockWorld
from .config import settings

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s",
    datefmt="%H:%M:%S",
)
logger = logging.getLogger("missiles.server")

_server_start_time: float = 0.0


def build_demo_host(data_dir: Path) -> tuple[GameServer, MissilesPlugin]:
    """Flat world, empty region container and the missiles plugin, enabled."""
    game = GameServer()
    game.add_world(
        BlockWorld.flat(
            settings.WORLD_NAME,
            settings.WORLD_SIZE_X,
            settings.WORLD_SIZE_Y,
            settings.WORLD_SIZE_Z,
            settings.GROUND_LEVEL,
        )
    )
    regions = RegionContainer()
    regions.create(settings.WORLD_NAME)
    plugin = MissilesPlugin(game, data_dir, regions)
    game.load_plugin(plugin)
    return game, plugin


async def _tick_loop(game: GameServer, interval_s: float) -> None:
    while True:
        game.tick()
        await asyncio.sleep(interval_s)


def create_app(
    *,
    game: GameServer | None = None,
    plugin: MissilesPlugin | None = None,
    data_dir: Path | None = None,
    tick_loop: bool = True,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        game: Host to drive. A demo host is built when omitted.
        plugin: The missiles plugin loaded into `game`. Required when `game` is given.
        data_dir: Plugin data folder for the demo host.
        tick_loop: Run the host clock in the background; disable to step via POST /tick.
    """
    from .models import HealthResponse
    from .routes import console

    if game is None:
        game, plugin = build_demo_host(data_dir or settings.DATA_DIR)
    elif plugin is None:
        raise ValueError("plugin is required when passing a game")

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        global _server_start_time
        _server_start_time = time.time()
        task = None
        if tick_loop:
            task = asyncio.create_task(_tick_loop(game, settings.TICK_INTERVAL_S))
            logger.info(f"Tick loop started ({settings.TICK_INTERVAL_S * 1000:.0f} ms per tick)")
        yield
        logger.info("Missiles console shutting down...")
        if task is not None:
            task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await task
        game.disable_plugins()

    app = FastAPI(lifespan=lifespan, title="Missiles Console")

    console.init_console_routes(game, plugin)
    app.include_router(console.router)

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return HealthResponse(
            status="ok",
            tick=game.current_tick,
            active_missiles=len(plugin.active_missiles),
            uptime_s=time.time() - _server_start_time,
        )

    return app
