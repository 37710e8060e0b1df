#!/usr/bin/env python3
"""Main entry point for the M/M/1 simulation package."""

from .scripts.run_simulation import main

if __name__ == '__main__':
    main()
