"""Module entry point for running with python -m mdbundle."""

import sys

from mdbundle.cli import main

if __name__ == "__main__":
    sys.exit(main())
