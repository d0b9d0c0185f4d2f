# missiles/server/config.py
"""Console server configuration with sensible defaults for local use."""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from ..constants import TICK_INTERVAL_S as DEFAULT_TICK_INTERVAL_S


class Settings(BaseSettings):
    """Server settings, overridable via environment variables."""

    # Host simulation
    TICK_INTERVAL_S: float = DEFAULT_TICK_INTERVAL_S
    WORLD_NAME: str = "world"
    WORLD_SIZE_X: int = 128
    WORLD_SIZE_Y: int = 96
    WORLD_SIZE_Z: int = 128
    GROUND_LEVEL: int = 64

    # Plugin
    DATA_DIR: Path = Path("plugins/Missiles")

    # Effects returned by GET /effects
    EFFECTS_TAIL: int = 64

    # Server
    HOST: str = "127.0.0.1"
    PORT: int = 8095

    model_config = SettingsConfigDict(env_prefix="MISSILES_", env_file=".env", extra="ignore")


settings = Settings()
