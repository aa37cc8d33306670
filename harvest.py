#!/usr/bin/env python3
"""
Type Harvest - styled text to semantic HTML, grouped by font family

Simple usage:
    python harvest.py export.json                # Print font groups
    python harvest.py export.json --flat         # Print one HTML line per block
    python harvest.py notes.docx -o result.json  # Save items and groups as JSON
"""

import sys
from pathlib import Path

# Add src to path for development
src_path = Path(__file__).parent / "src"
if src_path.exists():
    sys.path.insert(0, str(src_path))

from type_harvest.cli import app

if __name__ == "__main__":
    app()
