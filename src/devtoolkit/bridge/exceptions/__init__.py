"""
Custom exceptions for host bridge calls.
"""

class BridgeError(Exception):
    """Base exception for all host bridge errors."""
    pass

class BridgeValidationError(BridgeError, ValueError):
    """Raised when an argument is rejected before reaching a host command."""
    pass

class CommandNotFoundError(BridgeError):
    """Raised when the host command is not installed."""
    pass

class BridgeCommandError(BridgeError):
    """Raised when a host command fails or returns no usable output."""
    pass

class BridgeTimeoutError(BridgeError):
    """Raised when a host command exceeds its timeout."""
    pass

class RateLimitExceeded(BridgeError):
    """Raised when a command category is over its request budget."""
    pass
