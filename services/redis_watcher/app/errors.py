from __future__ import annotations


class InvalidArgumentError(ValueError):
    """Raised for bad watcher or configuration input."""


class MissingConfigurationError(ValueError):
    """Raised when a watcher is constructed without a configuration."""


class RedisConnectionError(Exception):
    """Raised when the Redis endpoint can not be reached or selected."""


class UnsupportedCommandError(Exception):
    def __init__(self, command: str) -> None:
        super().__init__(f"Redis command is not implemented: '{command}'.")
        self.command = command


class MalformedCommandError(Exception):
    def __init__(self, command: str, reason: str) -> None:
        super().__init__(f"Redis command '{command}' is malformed: {reason}.")
        self.command = command
        self.reason = reason
