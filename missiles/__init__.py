from .config import LaunchConfig, PluginConfig
from .missile import Missile, MissileState
from .plugin import MissilesPlugin

__all__ = ["LaunchConfig", "Missile", "MissileState", "MissilesPlugin", "PluginConfig"]
