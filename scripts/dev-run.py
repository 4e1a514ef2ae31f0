#!/usr/bin/env python3
"""
Command-line entry point for fanoutcopy.

Runs the tool straight from a source checkout without installing it.
"""

import sys
from pathlib import Path

# Add src directory to Python path (go up to project root first)
project_root = Path(__file__).parent.parent
src_dir = project_root / "src"
sys.path.insert(0, str(src_dir))

from fanoutcopy import main

if __name__ == "__main__":
    sys.exit(main())
