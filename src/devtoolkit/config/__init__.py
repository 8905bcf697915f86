from .settings import (
    get_config_directory,
    load_config,
    reload_config,
    get_section,
    is_tool_enabled,
)
from .tools import TOOLS, get_enabled_tools

__all__ = [
    'get_config_directory',
    'load_config',
    'reload_config',
    'get_section',
    'is_tool_enabled',
    'TOOLS',
    'get_enabled_tools',
]
