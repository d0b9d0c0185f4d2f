from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import ConfigError
from .sim.entity import EntityKind
from .sim.particles import Particle

CONFIG_FILENAME = "config.json"

# Written to the data folder on first enable.
DEFAULT_CONFIG: dict[str, Any] = {
    "explosionRadius": 3,
    "missileParticle": "SMOKE_NORMAL",
    "explosionParticle": "EXPLOSION_LARGE",
    "missileParticleCount": 10,
    "explosionParticleCount": 1,
    "fireballEnabled": True,
    "missileEntity": "FIREBALL",
    "targetYOffset": 5,
    "spawnDistance": {"x": 40, "y": 20, "z": 40},
    "regionFlag": "EDP-ENCHANTS",
}


class SpawnDistance(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    x: int = 40
    y: int = 20
    z: int = 40


class PluginConfig(BaseModel):
    """Plugin configuration file. Keys absent from the file fall back to these defaults."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    # A missing radius reads as 0, i.e. only the impact block itself is in range.
    explosion_radius: int = Field(0, alias="explosionRadius")
    missile_particle: Particle = Field(Particle.SMOKE_NORMAL, alias="missileParticle")
    explosion_particle: Particle = Field(Particle.EXPLOSION_LARGE, alias="explosionParticle")
    missile_particle_count: int = Field(10, alias="missileParticleCount")
    explosion_particle_count: int = Field(1, alias="explosionParticleCount")
    # Read for compatibility with existing config files; nothing branches on it.
    fireball_enabled: bool = Field(True, alias="fireballEnabled")
    missile_entity: EntityKind = Field(EntityKind.FIREBALL, alias="missileEntity")
    target_y_offset: int = Field(5, alias="targetYOffset")
    spawn_distance: SpawnDistance = Field(default_factory=SpawnDistance, alias="spawnDistance")
    region_flag: str = Field("EDP-ENCHANTS", alias="regionFlag")

    @field_validator("missile_entity", mode="before")
    @classmethod
    def _upper_entity(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.upper()
        return value

    def to_file_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


def save_default_config(data_folder: Path) -> Path:
    """Write the default config file unless one already exists."""
    path = Path(data_folder) / CONFIG_FILENAME
    if path.exists():
        return path
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        json.dump(DEFAULT_CONFIG, f, indent=2)
    return path


def load_config(path: Path) -> PluginConfig:
    """Read and validate a config file. A missing file yields the defaults."""
    path = Path(path)
    if not path.exists():
        return PluginConfig()
    try:
        with open(path) as f:
            raw = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"{path} is not valid JSON: {e}") from e
    if not isinstance(raw, dict):
        raise ConfigError(f"{path} must contain a JSON object")
    return parse_config(raw)


def parse_config(raw: dict[str, Any]) -> PluginConfig:
    try:
        return PluginConfig.model_validate(raw)
    except ValidationError as e:
        raise ConfigError(f"Invalid plugin configuration: {e}") from e


@dataclass(frozen=True)
class LaunchConfig:
    """Everything one launch needs, resolved from the config at launch time."""

    explosion_radius: int
    trail_particle: Particle
    explosion_particle: Particle
    trail_particle_count: int
    explosion_particle_count: int
    fireball_enabled: bool
    entity_kind: EntityKind
    target_y_offset: int
    spawn_distance_x: int
    spawn_distance_y: int
    spawn_distance_z: int
    region_flag: str

    @classmethod
    def from_config(cls, config: PluginConfig) -> LaunchConfig:
        return cls(
            explosion_radius=config.explosion_radius,
            trail_particle=config.missile_particle,
            explosion_particle=config.explosion_particle,
            trail_particle_count=config.missile_particle_count,
            explosion_particle_count=config.explosion_particle_count,
            fireball_enabled=config.fireball_enabled,
            entity_kind=config.missile_entity,
            target_y_offset=config.target_y_offset,
            spawn_distance_x=config.spawn_distance.x,
            spawn_distance_y=config.spawn_distance.y,
            spawn_distance_z=config.spawn_distance.z,
            region_flag=config.region_flag,
        )
