# Copyright (c) 2025-2026 OptimNow. All Rights Reserved.
# Licensed under the Apache License, Version 2.0.
# See LICENSE file in the project root for full license information.

#!/usr/bin/env python3
"""
Main entry point for the OCI tag audit.

This script loads environment variables, resolves the OCI config file,
audits every region profile in parallel and writes the CSV reports
(default directory: data).

Usage:
    python run_audit.py [--missing-tags] [--no-owner]

Or as a module:
    python -m oci_tag_audit [--missing-tags] [--no-owner]
"""

import os
import sys

# Add the project root to the path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from oci_tag_audit.main import main


if __name__ == "__main__":
    sys.exit(main())
