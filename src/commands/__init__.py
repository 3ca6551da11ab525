"""Command system for the relay.

Each command is a class that inherits from BaseCommand and implements:
- verb: the Verb it handles (aliases map onto the same verb)
- help_text: brief description
- execute(directory, target): run the command and return the reply text

CommandInterpreter ties parsing, the registry and error handling together.
"""

from .base import BaseCommand, CommandRegistry, ServerDirectory, resolve_server
from .interpreter import CommandInterpreter, build_registry
from .parsing import Command, Verb, parse_command

__all__ = [
    "BaseCommand",
    "CommandRegistry",
    "ServerDirectory",
    "resolve_server",
    "CommandInterpreter",
    "build_registry",
    "Command",
    "Verb",
    "parse_command",
]
