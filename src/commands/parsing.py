"""Turn raw message text into a typed Command."""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional


class Verb(Enum):
    HELP = "help"
    LIST = "list"
    STATUS = "status"
    POWER_ON = "start"
    POWER_OFF = "stop"
    SHUTDOWN = "shutdown"
    REBOOT = "reboot"
    UNKNOWN = "unknown"


# Every accepted spelling, including aliases.
VERB_TOKENS: Dict[str, Verb] = {
    "help": Verb.HELP,
    "list": Verb.LIST,
    "servers": Verb.LIST,
    "status": Verb.STATUS,
    "start": Verb.POWER_ON,
    "poweron": Verb.POWER_ON,
    "stop": Verb.POWER_OFF,
    "poweroff": Verb.POWER_OFF,
    "shutdown": Verb.SHUTDOWN,
    "reboot": Verb.REBOOT,
}


@dataclass(frozen=True)
class Command:
    verb: Verb
    token: str
    target: Optional[str] = None


def parse_command(raw: Optional[str]) -> Command:
    """Parse `raw` into a Command.

    Input is trimmed, lowercased and split on whitespace. Empty input is
    treated as `help`. Tokens after the second are ignored.
    """
    parts = (raw or "").strip().lower().split()
    if not parts:
        return Command(verb=Verb.HELP, token="help")

    token = parts[0]
    target = parts[1] if len(parts) > 1 else None
    return Command(verb=VERB_TOKENS.get(token, Verb.UNKNOWN), token=token, target=target)


__all__ = ["Verb", "VERB_TOKENS", "Command", "parse_command"]
