"""
Flask blueprints, one per tool group.
"""

from .text import text_bp
from .lists import lists_bp
from .converter import converter_bp
from .cron import cron_bp
from .regex import regex_bp
from .text_diff import text_diff_bp
from .validator import validator_bp
from .timestamps import timestamps_bp
from .generators import generators_bp
from .security import security_bp
from .network import network_bp
from .numbers import numbers_bp
from .domain import domain_bp
from .homebrew import homebrew_bp
from .overwatch import overwatch_bp

ALL_BLUEPRINTS = [
    text_bp,
    lists_bp,
    converter_bp,
    cron_bp,
    regex_bp,
    text_diff_bp,
    validator_bp,
    timestamps_bp,
    generators_bp,
    security_bp,
    network_bp,
    numbers_bp,
    domain_bp,
    homebrew_bp,
    overwatch_bp,
]
