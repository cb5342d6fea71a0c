"""Client configuration.

Settings can be passed explicitly or read from the environment:

- RESP_MAPPER_TIMEOUT: seconds to wait for a reply (unset or empty = no limit)
- RESP_MAPPER_LOG_COMMANDS: log every submitted command at DEBUG level
"""

from __future__ import annotations

import os
from dataclasses import dataclass

TIMEOUT_ENV = "RESP_MAPPER_TIMEOUT"
LOG_COMMANDS_ENV = "RESP_MAPPER_LOG_COMMANDS"

_TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass
class ClientConfig:
    """Configuration for a Client.

    This only covers what the mapping layer itself does. Connection settings
    belong to the sender.
    """

    # Upper bound on how long a single command waits for its reply
    timeout: float | None = None

    # Log commands (name and arguments) before they are sent
    log_commands: bool = False

    def __post_init__(self) -> None:
        if self.timeout is not None and self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}")

    @classmethod
    def from_env(cls) -> ClientConfig:
        """Build a config from RESP_MAPPER_* environment variables.

        Raises:
            ValueError: If RESP_MAPPER_TIMEOUT is not a positive number
        """
        raw_timeout = os.environ.get(TIMEOUT_ENV, "").strip()
        timeout = float(raw_timeout) if raw_timeout else None

        raw_log = os.environ.get(LOG_COMMANDS_ENV, "").strip().lower()

        return cls(timeout=timeout, log_commands=raw_log in _TRUE_VALUES)
