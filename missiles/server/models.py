# missiles/server/models.py
"""Pydantic models for console requests/responses."""

from typing import Any

from pydantic import BaseModel, Field


class CommandRequest(BaseModel):
    """A command line run as the console sender."""

    line: str


class CommandResponse(BaseModel):
    success: bool
    messages: list[str]


class PlayerRequest(BaseModel):
    """Bring a player online at a position."""

    name: str
    world: str = "world"
    x: float
    y: float
    z: float
    permissions: list[str] = Field(default_factory=list)


class RegionRequest(BaseModel):
    """Define or replace a cuboid region."""

    world: str = "world"
    id: str
    min: tuple[int, int, int]
    max: tuple[int, int, int]
    flags: dict[str, Any] = Field(default_factory=dict)
    priority: int = 0


class TickRequest(BaseModel):
    count: int = Field(1, ge=1, le=72000)


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    tick: int
    active_missiles: int
    uptime_s: float
