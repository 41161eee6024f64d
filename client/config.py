"""
Client configuration.

Read from environment variables so the signing secret is provisioned
out-of-band rather than shipped with the client.
"""
import os
from dataclasses import dataclass
from pathlib import Path

DEFAULT_SERVER_URL = "http://localhost:7861/api/v1"
DEFAULT_TIMEOUT_SECONDS = 10.0
DEFAULT_KEY_STORE = Path.home() / ".cflow" / "license.json"


@dataclass(frozen=True)
class ClientConfig:
    """Settings for talking to the license ledger."""

    server_url: str = DEFAULT_SERVER_URL
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    signing_secret: str = ""
    key_store_path: Path = DEFAULT_KEY_STORE

    @classmethod
    def from_env(cls) -> "ClientConfig":
        """
        Build configuration from environment variables.

        Returns:
            ClientConfig

        Raises:
            ValueError: If LICENSE_SERVER_TIMEOUT is not a positive number
        """
        timeout = float(os.environ.get("LICENSE_SERVER_TIMEOUT", DEFAULT_TIMEOUT_SECONDS))
        if timeout <= 0:
            raise ValueError("LICENSE_SERVER_TIMEOUT must be positive")

        return cls(
            server_url=os.environ.get("LICENSE_SERVER_URL", DEFAULT_SERVER_URL).rstrip("/"),
            timeout_seconds=timeout,
            signing_secret=os.environ.get("LICENSE_SIGNING_SECRET", ""),
            key_store_path=Path(
                os.environ.get("LICENSE_KEY_STORE", str(DEFAULT_KEY_STORE))
            ).expanduser(),
        )
