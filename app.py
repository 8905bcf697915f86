#!/usr/bin/env python3
"""
Main entry point for the Dev Toolkit application.
Runs the server from a source checkout without installing the package.
"""

import sys
from pathlib import Path

# Add the src directory to the Python path so we can import from it
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root / "src"))

from devtoolkit.cli import main

if __name__ == '__main__':
    main()
