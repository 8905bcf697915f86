"""
Host bridge: validated, rate-limited calls into native host commands.
"""

from .base import CommandOutput, run_command
from .rate_limiter import RateLimiter, get_rate_limiter
from .exceptions import (
    BridgeError,
    BridgeValidationError,
    CommandNotFoundError,
    BridgeCommandError,
    BridgeTimeoutError,
    RateLimitExceeded,
)

__all__ = [
    'CommandOutput',
    'run_command',
    'RateLimiter',
    'get_rate_limiter',
    'BridgeError',
    'BridgeValidationError',
    'CommandNotFoundError',
    'BridgeCommandError',
    'BridgeTimeoutError',
    'RateLimitExceeded',
]
