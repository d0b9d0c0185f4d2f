# missiles/server/routes/console.py
"""Console endpoints: run commands, manage players and regions, step the clock."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from fastapi import APIRouter, HTTPException

from ...errors import ConfigError, UnknownWorldError
from ...regions import ProtectedRegion
from ...sim.senders import ConsoleSender, Player
from ...sim.vector import Location
from ..config import settings
from ..models import CommandRequest, CommandResponse, PlayerRequest, RegionRequest, TickRequest

if TYPE_CHECKING:
    from ...plugin import MissilesPlugin
    from ...sim.host import GameServer

logger = logging.getLogger("missiles.server")

router = APIRouter()

_game: GameServer | None = None
_plugin: MissilesPlugin | None = None


def init_console_routes(game: GameServer, plugin: MissilesPlugin) -> None:
    """Bind the routes to a host and its missiles plugin."""
    global _game, _plugin
    _game = game
    _plugin = plugin


def _get_game() -> GameServer:
    if _game is None:
        raise HTTPException(status_code=503, detail="Host not initialized")
    return _game


def _get_plugin() -> MissilesPlugin:
    if _plugin is None:
        raise HTTPException(status_code=503, detail="Plugin not initialized")
    return _plugin


@router.post("/console/command", response_model=CommandResponse)
async def run_command(request: CommandRequest) -> CommandResponse:
    """Run a command line as the console."""
    game = _get_game()
    console = ConsoleSender()
    success = game.dispatch_command(console, request.line)
    logger.info(f"Console ran {request.line!r} -> {success}")
    return CommandResponse(success=success, messages=console.drain_messages())


@router.get("/players")
async def list_players() -> list[dict[str, Any]]:
    return [
        {"name": p.name, "world": p.location.world, "pos": p.location.to_list(), "permissions": sorted(p.permissions)}
        for p in _get_game().online_players
    ]


@router.post("/players")
async def add_player(request: PlayerRequest) -> dict[str, str]:
    game = _get_game()
    if request.world not in game.worlds:
        raise HTTPException(status_code=404, detail=f"World {request.world} not loaded")
    player = Player(
        name=request.name,
        permissions=set(request.permissions),
        location=Location(request.world, request.x, request.y, request.z),
    )
    game.add_player(player)
    return {"status": "ok", "name": player.name}


@router.post("/players/{name}/command", response_model=CommandResponse)
async def run_player_command(name: str, request: CommandRequest) -> CommandResponse:
    """Run a command line as an online player."""
    game = _get_game()
    player = game.get_player_exact(name)
    if player is None:
        raise HTTPException(status_code=404, detail=f"Player {name} not online")
    player.drain_messages()
    success = game.dispatch_command(player, request.line)
    return CommandResponse(success=success, messages=player.drain_messages())


@router.delete("/players/{name}")
async def remove_player(name: str) -> dict[str, str]:
    game = _get_game()
    if game.get_player_exact(name) is None:
        raise HTTPException(status_code=404, detail=f"Player {name} not online")
    game.remove_player(name)
    return {"status": "ok"}


@router.put("/regions")
async def put_region(request: RegionRequest) -> dict[str, str]:
    plugin = _get_plugin()
    manager = plugin.regions.create(request.world)
    manager.add_region(
        ProtectedRegion(
            id=request.id, min=request.min, max=request.max, flags=dict(request.flags), priority=request.priority
        )
    )
    return {"status": "ok", "id": request.id}


@router.post("/plugin/reload")
async def reload_plugin() -> dict[str, Any]:
    plugin = _get_plugin()
    try:
        config = plugin.reload_config()
    except ConfigError as e:
        logger.error(f"Config reload failed: {e}")
        raise HTTPException(status_code=400, detail=str(e)) from e
    return {"status": "ok", "config": config.to_file_dict()}


@router.get("/missiles")
async def list_missiles() -> list[dict[str, Any]]:
    return [m.to_dict() for m in _get_plugin().active_missiles]


@router.post("/tick")
async def step(request: TickRequest) -> dict[str, int]:
    """Advance the host clock by hand."""
    game = _get_game()
    try:
        game.run_ticks(request.count)
    except UnknownWorldError as e:
        raise HTTPException(status_code=409, detail=str(e)) from e
    return {"tick": game.current_tick}


@router.get("/effects")
async def recent_effects() -> dict[str, list[dict[str, Any]]]:
    game = _get_game()
    tail = settings.EFFECTS_TAIL
    return {
        "particles": [p.to_dict() for p in list(game.particles)[-tail:]],
        "explosions": [e.to_dict() for e in list(game.explosions)[-tail:]],
    }
