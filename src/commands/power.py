"""Power commands - start, stop, shutdown and reboot a server.

Each command resolves its target first, skips the remote call when the
server is already in the requested state, and otherwise sends one action
request. A True result only means Hetzner accepted the action.
"""

import logging
from abc import abstractmethod
from typing import Callable, Optional

from commands.base import BaseCommand, ServerDirectory, resolve_server
from commands.parsing import Verb
from errors import TransportError
from models import Server


logger = logging.getLogger(__name__)


class PowerActionCommand(BaseCommand):
    """Shared flow for the four power commands.

    Subclasses fill in the messages and pick the directory method.
    """

    success_message = ""
    failure_message = ""
    # Message returned without calling the API, or "" if the guard never applies.
    noop_message = ""

    def is_noop(self, server: Server) -> bool:
        return False

    @abstractmethod
    def action(self, directory: ServerDirectory) -> Callable[[int], bool]:
        """Directory method that sends this command's action."""
        pass

    def execute(self, directory: ServerDirectory, target: Optional[str]) -> str:
        server = resolve_server(directory, target)
        if self.is_noop(server):
            return self.noop_message.format(name=server.name)

        try:
            accepted = self.action(directory)(server.id)
        except TransportError as exc:
            logger.error(f"{self.name} request for server {server.id} failed: {exc}")
            accepted = False
        message = self.success_message if accepted else self.failure_message
        return message.format(name=server.name)


class PowerOnCommand(PowerActionCommand):
    aliases = ("poweron",)
    success_message = "Starting server *{name}*... This may take a moment."
    failure_message = "Failed to start server *{name}*. Please try again."
    noop_message = "Server *{name}* is already running."

    @property
    def verb(self) -> Verb:
        return Verb.POWER_ON

    @property
    def help_text(self) -> str:
        return "Power on server"

    def is_noop(self, server: Server) -> bool:
        return server.is_running

    def action(self, directory: ServerDirectory) -> Callable[[int], bool]:
        return directory.power_on


class PowerOffCommand(PowerActionCommand):
    aliases = ("poweroff",)
    success_message = "Forcing power off for *{name}*..."
    failure_message = "Failed to stop server *{name}*. Please try again."
    noop_message = "Server *{name}* is already off."

    @property
    def verb(self) -> Verb:
        return Verb.POWER_OFF

    @property
    def help_text(self) -> str:
        return "Force power off"

    def is_noop(self, server: Server) -> bool:
        return server.is_off

    def action(self, directory: ServerDirectory) -> Callable[[int], bool]:
        return directory.power_off


class ShutdownCommand(PowerActionCommand):
    success_message = "Gracefully shutting down *{name}*..."
    failure_message = "Failed to shutdown server *{name}*. Please try again."
    noop_message = "Server *{name}* is already off."

    @property
    def verb(self) -> Verb:
        return Verb.SHUTDOWN

    @property
    def help_text(self) -> str:
        return "Graceful shutdown"

    def is_noop(self, server: Server) -> bool:
        return server.is_off

    def action(self, directory: ServerDirectory) -> Callable[[int], bool]:
        return directory.shutdown


class RebootCommand(PowerActionCommand):
    success_message = "Rebooting *{name}*..."
    failure_message = "Failed to reboot server *{name}*. Please try again."

    @property
    def verb(self) -> Verb:
        return Verb.REBOOT

    @property
    def help_text(self) -> str:
        return "Reboot server"

    def action(self, directory: ServerDirectory) -> Callable[[int], bool]:
        return directory.reboot
