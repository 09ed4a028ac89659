# -*- coding: utf-8 -*-
"""
gtxtranslate Launcher
Runs the command line interface from a source checkout.
"""

import sys

# Ensure stdout/stderr use UTF-8 where possible
try:
    if hasattr(sys.stdout, "reconfigure"):
        sys.stdout.reconfigure(encoding="utf-8", errors="replace")
    if hasattr(sys.stderr, "reconfigure"):
        sys.stderr.reconfigure(encoding="utf-8", errors="replace")
except (AttributeError, OSError):
    pass

from gtxtranslate.cli_main import main

if __name__ == "__main__":
    sys.exit(main())
