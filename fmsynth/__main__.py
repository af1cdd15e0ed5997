"""
Entry point for `python -m fmsynth`.
"""

import sys

from fmsynth.cli import main

if __name__ == '__main__':
    sys.exit(main())
