"""
Runs whitelisted host commands without a shell.
"""

import subprocess
import logging
from dataclasses import dataclass, asdict
from typing import Dict, Any, List, Optional

from .exceptions import CommandNotFoundError, BridgeTimeoutError
from .rate_limiter import get_rate_limiter
from ..config.settings import get_section

logger = logging.getLogger(__name__)


@dataclass
class CommandOutput:
    """Captured result of one host command."""
    stdout: str
    stderr: str
    success: bool
    returncode: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def default_timeout() -> float:
    return float(get_section('bridge').get('timeout_seconds', 30))


def run_command(args: List[str], category: Optional[str] = None,
                timeout: Optional[float] = None,
                input_data: Optional[bytes] = None) -> CommandOutput:
    """
    Execute a host command and capture its output.

    Args:
        args: Program and arguments, passed to the OS without a shell
        category: Rate limit category, or None to skip limiting
        timeout: Seconds before the command is killed
        input_data: Bytes written to the command's stdin

    Returns:
        CommandOutput with decoded stdout and stderr
    """
    if category:
        get_rate_limiter().check(category)
    if timeout is None:
        timeout = default_timeout()

    program = args[0]
    logger.debug("Running host command: %s", " ".join(args))
    try:
        completed = subprocess.run(
            args,
            input=input_data,
            stdin=None if input_data is not None else subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            timeout=timeout,
            check=False,
        )
    except FileNotFoundError:
        raise CommandNotFoundError(f"Failed to execute {program} command: {program} is not installed")
    except subprocess.TimeoutExpired:
        logger.warning("Host command %s timed out after %ss", program, timeout)
        raise BridgeTimeoutError(f"{program} timed out after {timeout:g} seconds")

    output = CommandOutput(
        stdout=(completed.stdout or b"").decode('utf-8', errors='replace'),
        stderr=(completed.stderr or b"").decode('utf-8', errors='replace'),
        success=completed.returncode == 0,
        returncode=completed.returncode,
    )
    if not output.success:
        logger.info("Host command %s exited with %s", program, completed.returncode)
    return output
