"""Convenience shim to run the NJSON bulk loader."""

from __future__ import annotations

import sys

from src.bulkload.runner import main as loading_main


if __name__ == "__main__":
    sys.exit(loading_main(sys.argv[1:]))
