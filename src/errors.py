"""Exception types shared by the relay."""


class RelayError(Exception):
    """Base class for all relay errors."""


class ConfigurationError(RelayError):
    """Required configuration is missing or malformed."""


class TransportError(RelayError):
    """A call to the Hetzner API could not be completed."""


class UsageError(RelayError):
    """A command was given without its required argument."""

    def __init__(self, usage: str):
        super().__init__(usage)
        self.usage = usage


class NotFoundError(RelayError):
    """A server token did not resolve to any server."""

    def __init__(self, token: str):
        super().__init__(f"Server '{token}' not found.")
        self.token = token


__all__ = [
    "RelayError",
    "ConfigurationError",
    "TransportError",
    "UsageError",
    "NotFoundError",
]
