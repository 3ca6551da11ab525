"""list and status commands - read-only views of the project's servers."""

from typing import Optional

from commands.base import BaseCommand, ServerDirectory, resolve_server
from commands.formatting import format_server_details, format_server_list
from commands.parsing import Verb


class ListServersCommand(BaseCommand):
    aliases = ("servers",)
    requires_target = False

    @property
    def verb(self) -> Verb:
        return Verb.LIST

    @property
    def help_text(self) -> str:
        return "List all servers"

    def execute(self, directory: ServerDirectory, target: Optional[str]) -> str:
        # TransportError propagates; the interpreter turns it into a retry message.
        return format_server_list(directory.list_servers())


class StatusCommand(BaseCommand):
    @property
    def verb(self) -> Verb:
        return Verb.STATUS

    @property
    def help_text(self) -> str:
        return "Get server status"

    def execute(self, directory: ServerDirectory, target: Optional[str]) -> str:
        return format_server_details(resolve_server(directory, target))
