#!/usr/bin/env python3
"""
osdiscovery

Main executable entry point for the host discovery tool.
This script runs the CLI and exits with appropriate status codes.

Usage:
    ./discover.py [options]
    python3 discover.py [options]

Exit Codes:
    0 - Success, report written
    1 - Error occurred (e.g., unknown distribution)
    2 - Report written but the package list could not be produced

Examples:
    # Print the system identity
    ./discover.py --pretty

    # Include installed packages and write to a file
    ./discover.py --packages -o inventory.json

    # Trace every probed source
    ./discover.py -v
"""

import sys
from osdiscovery.cli import main

if __name__ == "__main__":
    sys.exit(main())
