"""Runtime settings for the relay.

All values come from the environment (a `.env` file is loaded by `main`
before `load_settings()` runs). See `.env.example` for the full list.

Credentials are not validated here: each collaborator checks the ones it
needs when it is constructed, so the console can run without Twilio
credentials.
"""
from dataclasses import dataclass, field
from typing import List, Optional
import os

from errors import ConfigurationError


DEFAULT_API_URL = "https://api.hetzner.cloud/v1"
DEFAULT_TIMEOUT = 10.0
DEFAULT_PORT = 8080


def _get_env(name: str, required: bool = False) -> Optional[str]:
    val = os.getenv(name)
    if val is not None:
        val = val.strip()
    if required and not val:
        raise ConfigurationError(f"Missing required environment variable: {name}")
    return val or None


def _parse_float_env(name: str, default: float) -> float:
    val = _get_env(name)
    if val is None:
        return default
    try:
        parsed = float(val)
    except ValueError:
        raise ConfigurationError(f"Environment variable {name} must be a number; got: {val}")
    if parsed <= 0:
        raise ConfigurationError(f"Environment variable {name} must be positive; got: {val}")
    return parsed


def _parse_int_env(name: str, default: int) -> int:
    val = _get_env(name)
    if val is None:
        return default
    try:
        return int(val)
    except ValueError:
        raise ConfigurationError(f"Environment variable {name} must be an integer; got: {val}")


def _parse_list_env(name: str) -> List[str]:
    val = _get_env(name)
    if not val:
        return []
    return [item.strip() for item in val.split(",") if item.strip()]


@dataclass(frozen=True)
class Settings:
    hetzner_api_token: Optional[str] = None
    hetzner_api_url: str = DEFAULT_API_URL
    hetzner_timeout: float = DEFAULT_TIMEOUT
    twilio_account_sid: Optional[str] = None
    twilio_auth_token: Optional[str] = None
    twilio_whatsapp_number: Optional[str] = None
    twilio_timeout: float = DEFAULT_TIMEOUT
    allowed_phone_numbers: List[str] = field(default_factory=list)
    port: int = DEFAULT_PORT
    log_level: str = "INFO"


def load_settings() -> Settings:
    """Build Settings from the current environment.

    Raises:
        ConfigurationError: if a numeric variable cannot be parsed.
    """
    return Settings(
        hetzner_api_token=_get_env("HETZNER_API_TOKEN"),
        hetzner_api_url=_get_env("HETZNER_API_URL") or DEFAULT_API_URL,
        hetzner_timeout=_parse_float_env("HETZNER_TIMEOUT", DEFAULT_TIMEOUT),
        twilio_account_sid=_get_env("TWILIO_ACCOUNT_SID"),
        twilio_auth_token=_get_env("TWILIO_AUTH_TOKEN"),
        twilio_whatsapp_number=_get_env("TWILIO_WHATSAPP_NUMBER"),
        twilio_timeout=_parse_float_env("TWILIO_TIMEOUT", DEFAULT_TIMEOUT),
        allowed_phone_numbers=_parse_list_env("ALLOWED_PHONE_NUMBERS"),
        port=_parse_int_env("PORT", DEFAULT_PORT),
        log_level=(_get_env("LOG_LEVEL") or "INFO").upper(),
    )


__all__ = ["Settings", "load_settings", "DEFAULT_API_URL", "DEFAULT_TIMEOUT"]
