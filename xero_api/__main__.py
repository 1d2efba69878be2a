"""
Main entry point for running xero_api as a module.

Usage:
    python -m xero_api [command] [options]

This is equivalent to running:
    python -m xero_api.debug [command] [options]
"""
import sys
from .debug import main

if __name__ == "__main__":
    sys.exit(main())
