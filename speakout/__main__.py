#!/usr/bin/env python3
"""
speakout entry point for running as a module: python3 -m speakout
"""

import sys
from speakout.cli import main

if __name__ == '__main__':
    sys.exit(main())
