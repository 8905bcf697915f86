"""
Dev Toolkit - a local dashboard of independent developer mini-tools.
"""

__version__ = "1.0.0"
