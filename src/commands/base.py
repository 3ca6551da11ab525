"""Base command class and registry."""

import re
from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Protocol, Tuple

from commands.parsing import Verb
from errors import NotFoundError, UsageError
from models import Server


HELP_HEADER = "*Hetzner Cloud Manager*"


class ServerDirectory(Protocol):
    """What commands need from the Hetzner client."""

    def list_servers(self) -> List[Server]: ...
    def get_server(self, server_id: int) -> Optional[Server]: ...
    def get_server_by_name(self, name: str) -> Optional[Server]: ...
    def power_on(self, server_id: int) -> bool: ...
    def power_off(self, server_id: int) -> bool: ...
    def shutdown(self, server_id: int) -> bool: ...
    def reboot(self, server_id: int) -> bool: ...


_SERVER_ID = re.compile(r"[+-]?\d+", re.ASCII)


def resolve_server(directory: ServerDirectory, token: str) -> Server:
    """Resolve `token` to a server: by id if it is an integer, else by name.

    A server whose name is all digits can therefore only be reached by id.

    Raises:
        NotFoundError: if nothing matches.
        TransportError: if the lookup itself fails.
    """
    if _SERVER_ID.fullmatch(token):
        server = directory.get_server(int(token))
    else:
        server = directory.get_server_by_name(token)
    if server is None:
        raise NotFoundError(token)
    return server


class BaseCommand(ABC):
    """Base class for all commands."""

    aliases: Tuple[str, ...] = ()
    requires_target: bool = True

    @property
    @abstractmethod
    def verb(self) -> Verb:
        """Verb this command handles."""
        pass

    @property
    @abstractmethod
    def help_text(self) -> str:
        """Brief help text for the command."""
        pass

    @property
    def name(self) -> str:
        return self.verb.value

    @property
    def usage(self) -> str:
        if self.requires_target:
            return f"Usage: {self.name} <server-name or id>"
        return f"Usage: {self.name}"

    def help_line(self) -> str:
        signature = f"{self.name} <name|id>" if self.requires_target else self.name
        line = f"*{signature}* - {self.help_text}"
        if self.aliases:
            line += f" (alias: {', '.join(self.aliases)})"
        return line

    def run(self, directory: ServerDirectory, target: Optional[str]) -> str:
        """Check the argument, then execute.

        Raises:
            UsageError: if a target is required but missing.
        """
        if self.requires_target and not target:
            raise UsageError(self.usage)
        return self.execute(directory, target)

    @abstractmethod
    def execute(self, directory: ServerDirectory, target: Optional[str]) -> str:
        """Execute the command and return the reply text.

        Args:
            directory: Hetzner client (or anything with the same methods)
            target: server token, already checked when required
        """
        pass


class CommandRegistry:
    """Registry for all available commands, keyed by verb."""

    def __init__(self):
        self._commands: Dict[Verb, BaseCommand] = {}

    def register(self, command: BaseCommand) -> None:
        """Register a command. Each verb may only be registered once."""
        if command.verb in self._commands:
            raise ValueError(f"duplicate command: {command.name}")
        if command.verb in (Verb.HELP, Verb.UNKNOWN):
            raise ValueError(f"reserved verb: {command.verb.value}")
        self._commands[command.verb] = command

    def get(self, verb: Verb) -> Optional[BaseCommand]:
        """Get a command by verb."""
        return self._commands.get(verb)

    def list_commands(self) -> List[BaseCommand]:
        """Commands in registration order."""
        return list(self._commands.values())

    def get_help(self) -> str:
        """Get help text for all commands."""
        lines = [HELP_HEADER, "", "Available commands:", ""]
        for cmd in self.list_commands():
            lines.append(cmd.help_line())
        lines.append("*help* - Show this message")
        return "\n".join(lines)
