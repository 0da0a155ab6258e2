"""Configuration errors raised while resolving common flags."""


class ConfigurationError(Exception):
    """Raised when parsed flags cannot be turned into a usable configuration."""


class InvalidLogLevelError(ConfigurationError):
    """Raised when a log level name is not part of the supported enumeration."""

    def __init__(self, level: str):
        super().__init__(f"Unable to parse logging level: {level}")
        self.level = level
