from __future__ import annotations

from typing import TYPE_CHECKING

from .constants import PERMISSION_USE, PLAYER_NOT_FOUND_MESSAGE, USAGE_MESSAGE
from .sim.senders import Player

if TYPE_CHECKING:
    from .plugin import MissilesPlugin
    from .sim.senders import CommandSender


class MissileCommand:
    """`/missiles [player]`.

    - no argument, sent by a player: launch at the sender
    - one argument, sender holds `missiles.use`: launch at that online player
    - anything else: usage message

    Self-launch does not check `missiles.use`.
    """

    def __init__(self, plugin: MissilesPlugin) -> None:
        self.plugin = plugin

    def on_command(self, sender: CommandSender, label: str, args: list[str]) -> bool:
        if len(args) == 1 and sender.has_permission(PERMISSION_USE):
            target = self.plugin.server.get_player(args[0])
            if target is not None:
                self.plugin.launch_missile(target)
                return True
            sender.send_message(PLAYER_NOT_FOUND_MESSAGE)
            return False
        if len(args) == 0 and isinstance(sender, Player):
            self.plugin.launch_missile(sender)
            return True
        sender.send_message(USAGE_MESSAGE)
        return False
