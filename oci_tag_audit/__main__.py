"""
Allow running the audit as a Python module.

Usage:
    python -m oci_tag_audit [--missing-tags] [--no-owner]

This is equivalent to running:
    python run_audit.py
"""

import sys

from .main import main

if __name__ == "__main__":
    sys.exit(main())
