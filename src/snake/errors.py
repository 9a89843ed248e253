# errors.py


class SnakeError(Exception):
    """Base class for errors raised by the snake core."""


class ConfigError(SnakeError, ValueError):
    """Configuration that cannot produce a consistent starting state."""


class BoardFullError(SnakeError, RuntimeError):
    """No free cell is left for food."""
