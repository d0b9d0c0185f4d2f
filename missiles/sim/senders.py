from __future__ import annotations

from dataclasses import dataclass, field

from .vector import Location


@dataclass
class CommandSender:
    name: str
    permissions: set[str] = field(default_factory=set)
    op: bool = False
    messages: list[str] = field(default_factory=list)

    def has_permission(self, node: str) -> bool:
        return self.op or node in self.permissions

    def send_message(self, message: str) -> None:
        self.messages.append(message)

    def drain_messages(self) -> list[str]:
        out = list(self.messages)
        self.messages.clear()
        return out


@dataclass
class ConsoleSender(CommandSender):
    """The server console. Holds every permission but has no position."""

    name: str = "CONSOLE"
    op: bool = True


@dataclass
class Player(CommandSender):
    location: Location = field(default_factory=lambda: Location("world", 0.0, 0.0, 0.0))
    online: bool = True

    def teleport(self, location: Location) -> None:
        self.location = location
