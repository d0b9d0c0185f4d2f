from .entity import Entity, EntityKind
from .host import CommandMap, GameServer
from .particles import ExplosionEffect, Particle, ParticleEmission
from .scheduler import ScheduledTask, TickScheduler
from .senders import CommandSender, ConsoleSender, Player
from .vector import Location, normalize
from .world import Block, BlockWorld

__all__ = [
    "Block",
    "BlockWorld",
    "CommandMap",
    "CommandSender",
    "ConsoleSender",
    "Entity",
    "EntityKind",
    "ExplosionEffect",
    "GameServer",
    "Location",
    "Particle",
    "ParticleEmission",
    "Player",
    "ScheduledTask",
    "TickScheduler",
    "normalize",
]
