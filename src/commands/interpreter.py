"""Command interpreter: raw message text in, reply text out."""

import logging
from typing import Optional

from commands.base import CommandRegistry, ServerDirectory
from commands.parsing import Command, Verb, parse_command
from commands.power import PowerOffCommand, PowerOnCommand, RebootCommand, ShutdownCommand
from commands.show_servers import ListServersCommand, StatusCommand
from errors import NotFoundError, TransportError, UsageError


logger = logging.getLogger(__name__)

LIST_FAILED_MESSAGE = "Failed to retrieve servers. Please try again later."
LOOKUP_FAILED_MESSAGE = "Failed to reach the Hetzner API. Please try again later."
GENERIC_ERROR_MESSAGE = "An error occurred. Please try again later."


def build_registry() -> CommandRegistry:
    """Registry with every built-in command, in help order."""
    registry = CommandRegistry()
    registry.register(ListServersCommand())
    registry.register(StatusCommand())
    registry.register(PowerOnCommand())
    registry.register(PowerOffCommand())
    registry.register(ShutdownCommand())
    registry.register(RebootCommand())
    return registry


class CommandInterpreter:
    """Parses a command, runs it against the directory and formats the reply.

    `interpret()` never raises: every failure becomes reply text.
    """

    def __init__(self, directory: ServerDirectory, registry: Optional[CommandRegistry] = None):
        self.directory = directory
        self.registry = registry or build_registry()

    def get_help(self) -> str:
        return self.registry.get_help()

    def interpret(self, raw_text: Optional[str]) -> str:
        try:
            return self._dispatch(parse_command(raw_text))
        except Exception:
            logger.exception(f"Unhandled error while interpreting {raw_text!r}")
            return GENERIC_ERROR_MESSAGE

    def _dispatch(self, command: Command) -> str:
        if command.verb is Verb.HELP:
            return self.get_help()

        handler = self.registry.get(command.verb)
        if handler is None:
            return f"Unknown command: {command.token}\n\n{self.get_help()}"

        try:
            return handler.run(self.directory, command.target)
        except UsageError as exc:
            return exc.usage
        except NotFoundError as exc:
            return str(exc)
        except TransportError as exc:
            if command.verb is Verb.LIST:
                logger.error(f"Failed to list servers: {exc}")
                return LIST_FAILED_MESSAGE
            logger.error(f"Failed to resolve server '{command.target}': {exc}")
            return LOOKUP_FAILED_MESSAGE
