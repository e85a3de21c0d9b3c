#!/usr/bin/env python3
"""
Entry point script for the command line tool.
Used by PyInstaller to build a standalone executable.
"""

import sys
from nixdisk.__main__ import main

if __name__ == '__main__':
    sys.exit(main())
