"""
Locates and runs the brew executable.
"""

import os
import shutil
import logging
from typing import List, Optional

from .base import run_command, CommandOutput
from ..config.settings import get_section

logger = logging.getLogger(__name__)

BREW_LOCATIONS = ["/opt/homebrew/bin/brew", "/usr/local/bin/brew"]


def get_brew_path() -> str:
    """Apple Silicon prefix first, then Intel, then whatever is on PATH."""
    for path in BREW_LOCATIONS:
        if os.path.exists(path):
            return path
    return shutil.which("brew") or "brew"


def run_brew(args: List[str], timeout: Optional[float] = None) -> CommandOutput:
    if timeout is None:
        timeout = float(get_section('bridge').get('brew_timeout_seconds', 900))
    return run_command([get_brew_path()] + list(args), timeout=timeout)
