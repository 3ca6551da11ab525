"""HTTP header helpers for Hetzner Cloud API requests.

- Content-Type: application/json
- Accept: application/json
- Authorization: Bearer <HETZNER_API_TOKEN>
"""
from typing import Dict, Optional

from errors import ConfigurationError


ENV_TOKEN_NAME = "HETZNER_API_TOKEN"


def get_common_headers(token: Optional[str]) -> Dict[str, str]:
    """Return the headers sent with every Hetzner API request.

    Raises:
        ConfigurationError: if no token is given.
    """
    if not token:
        raise ConfigurationError(
            f"Hetzner API token not configured. Set the environment variable {ENV_TOKEN_NAME}."
        )

    return {
        "Content-Type": "application/json",
        "Accept": "application/json",
        "Authorization": f"Bearer {token}",
    }


__all__ = ["get_common_headers", "ENV_TOKEN_NAME"]
