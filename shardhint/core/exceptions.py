"""
Error types raised by the hint routing core.
"""


class HintError(Exception):
    """Base class for all shardhint errors."""
    pass


class InvalidArgumentError(HintError, ValueError):
    """Raised when a sharding value is built from malformed input."""
    pass


class AlreadyReleasedError(HintError, RuntimeError):
    """Raised when a released hint manager is mutated."""
    pass


class UnsupportedOperationError(HintError, NotImplementedError):
    """Raised when an operator outside ShardingOperator reaches value construction."""
    pass


class HintNotActiveError(HintError, LookupError):
    """Raised when hint routing is requested but no manager is active."""
    pass
